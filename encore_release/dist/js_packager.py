"""Background build of the platform independent JS runtime bundle."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Optional, Sequence

from encore_release.compile import run_command
from encore_release.logging import LoggerLike, bind, get_logger

from .producer import ProducerHandle

logger = get_logger("JSPackager")

CommandRunner = Callable[..., object]


class JSPackager:
    """Builds the JS runtime once per release, in the background.

    :meth:`start` returns immediately with a :class:`ProducerHandle`; every platform
    build waits on that handle before copying the bundle from :attr:`dist_folder`.

    Parameters
    ----------
    repo_root : Path
        Root of the product checkout. The runtime lives in ``runtimes/js``.
    version : str
        The version being released, passed to the build as ``ENCORE_VERSION``.
    run : Optional[CommandRunner]
        Command runner with the signature of :func:`encore_release.compile.run_command`.
    log : Optional[LoggerLike]
        Base logger.
    """

    COMMANDS: Sequence[Sequence[str]] = (
        ("npm", "install", "--no-audit", "--no-fund"),
        ("npm", "run", "build"),
    )

    def __init__(
        self,
        repo_root: Path,
        version: str,
        run: Optional[CommandRunner] = None,
        log: Optional[LoggerLike] = None,
    ) -> None:
        self.repo_root = Path(repo_root)
        self.version = version
        self._run = run or run_command
        self.log = bind(log or logger, component="js")
        self._thread: Optional[threading.Thread] = None

    @property
    def package_dir(self) -> Path:
        return self.repo_root / "runtimes" / "js"

    @property
    def dist_folder(self) -> Path:
        return self.package_dir / "dist"

    def _build(self, handle: ProducerHandle) -> None:
        try:
            self.log.info("building JS runtime...")
            for cmd in self.COMMANDS:
                self._run(
                    list(cmd),
                    cwd=self.package_dir,
                    env={"ENCORE_VERSION": self.version},
                    log=self.log,
                )
            if not self.dist_folder.is_dir():
                raise FileNotFoundError(f"JS build did not produce {self.dist_folder}")
        except BaseException as e:
            self.log.error("JS runtime failed to build: %s", e)
            handle.fail(e)
            return
        self.log.info("JS runtime built successfully")
        handle.complete()

    def start(self) -> ProducerHandle:
        """Start the build on a background thread and return its handle.

        Raises
        ------
        RuntimeError
            If the packager was already started.
        """
        if self._thread is not None:
            raise RuntimeError("JS packager already started")
        handle = ProducerHandle(self.dist_folder)
        self._thread = threading.Thread(
            target=self._build, args=(handle,), name="js-packager", daemon=True
        )
        self._thread.start()
        return handle

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
