from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints

NonEmptyString = Annotated[str, StringConstraints(min_length=1)]
"""Type alias for non-empty strings with minimum length of 1."""

VersionString = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, pattern=r"^\S+$")
]
"""A version as given on the command line, e.g. ``v1.2.3-beta.1``. Surrounding
whitespace is stripped; embedded whitespace is rejected."""

ExpandedPath = Annotated[Path, AfterValidator(lambda p: p.expanduser())]
"""A filesystem path with ``~`` expanded."""


class BaseModelWithDocstrings(BaseModel):
    """Base model with the attribute docstrings being extracted to the model JSON schema."""

    model_config = ConfigDict(use_attribute_docstrings=True)


class FrozenModel(BaseModelWithDocstrings):
    """Immutable variant of :class:`BaseModelWithDocstrings`, used for per-build requests."""

    model_config = ConfigDict(use_attribute_docstrings=True, frozen=True)
