"""Logging helpers shared by the release tooling.

Every distribution build gets its own :class:`BuildLogger` bound to the target
platform, and that adapter is handed explicitly to each build step and
collaborator. Nothing about a build is stored on the module-level loggers, so
builds for different platforms running side by side never see each other's
context.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Mapping, MutableMapping, Optional, Tuple, Union

__all__ = ["BuildLogger", "bind", "configure_logging", "get_logger"]

_ROOT_NAME = "encore_release"
_FORMAT = "%(asctime)s %(levelname)s %(name)s%(context)s: %(message)s"

LoggerLike = Union[logging.Logger, "BuildLogger"]
"""Anything that can be passed where the tooling expects a logger."""


class _ContextFilter(logging.Filter):
    """Ensure every record carries a ``context`` attribute for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = ""
        return True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the ``encore_release`` namespace.

    Parameters
    ----------
    name : Optional[str]
        Child logger name, e.g. ``"DistBuilder"``. ``None`` returns the package root logger.

    Returns
    -------
    logging.Logger
        The requested logger.
    """
    if not name:
        return logging.getLogger(_ROOT_NAME)
    if name.startswith(_ROOT_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


def configure_logging(level: Union[int, str] = "INFO") -> logging.Logger:
    """Install a stream handler on the package root logger.

    Calling this more than once only updates the level.

    Parameters
    ----------
    level : Union[int, str]
        Level name (``"DEBUG"``, ``"INFO"``, ...) or numeric level.

    Returns
    -------
    logging.Logger
        The package root logger.
    """
    root = get_logger()
    if isinstance(level, str):
        level = level.upper()
    root.setLevel(level)
    if not any(getattr(h, "_encore_release", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler.addFilter(_ContextFilter())
        handler._encore_release = True  # type: ignore[attr-defined]
        root.addHandler(handler)
        root.propagate = False
    return root


class BuildLogger(logging.LoggerAdapter):
    """Logger adapter carrying key/value context, e.g. the target os and arch."""

    def __init__(self, logger: logging.Logger, context: Mapping[str, Any]) -> None:
        super().__init__(logger, dict(context))

    @property
    def context(self) -> Mapping[str, Any]:
        return self.extra

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        fields = dict(self.extra)
        extra = kwargs.pop("extra", None) or {}
        fields.update(extra)
        rendered = " ".join(f"{k}={v}" for k, v in fields.items())
        kwargs["extra"] = {**extra, "context": f" [{rendered}]" if rendered else ""}
        return msg, kwargs

    def bind(self, **context: Any) -> "BuildLogger":
        """Return a new adapter with ``context`` added to this one's."""
        return BuildLogger(self.logger, {**self.extra, **context})


def bind(logger: LoggerLike, **context: Any) -> BuildLogger:
    """Bind ``context`` to ``logger``, returning a new :class:`BuildLogger`."""
    if isinstance(logger, BuildLogger):
        return logger.bind(**context)
    return BuildLogger(logger, context)
