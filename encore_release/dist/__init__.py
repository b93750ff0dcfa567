"""Distribution builds.

- DistBuilder: builds and archives the distribution of one platform
- run_parallel: runs independent build steps concurrently, reporting the first error
- ProducerHandle: one-shot handoff from a background producer such as the JSPackager
- Toolchain: the compilers, fetcher and archiver a build delegates to
"""

from .builder import DistBuilder, node_plugin_artifact
from .js_packager import JSPackager
from .parallel import BuildStep, run_parallel
from .producer import ProducerHandle, ProducerResult
from .toolchain import Toolchain

__all__ = [
    "BuildStep",
    "DistBuilder",
    "JSPackager",
    "ProducerHandle",
    "ProducerResult",
    "Toolchain",
    "node_plugin_artifact",
    "run_parallel",
]
