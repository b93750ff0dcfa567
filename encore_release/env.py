"""Environment-driven settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

CACHE_PATH_ENV = "ENCORE_RELEASE_CACHE_PATH"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
LOG_LEVEL_ENV = "ENCORE_RELEASE_LOG_LEVEL"
SOURCE_DATE_EPOCH_ENV = "SOURCE_DATE_EPOCH"


def get_cache_path() -> Path:
    """Return the cache root, honoring ``ENCORE_RELEASE_CACHE_PATH``.

    Returns
    -------
    Path
        ``$ENCORE_RELEASE_CACHE_PATH`` if set, otherwise ``~/.cache/encore_release``.
    """
    value = os.environ.get(CACHE_PATH_ENV)
    if value:
        return Path(value).expanduser()
    return Path.home() / ".cache" / "encore_release"


def get_download_path() -> Path:
    return get_cache_path() / "downloads"


def get_github_token() -> Optional[str]:
    token = os.environ.get(GITHUB_TOKEN_ENV, "").strip()
    return token or None


def get_log_level(default: str = "INFO") -> str:
    return os.environ.get(LOG_LEVEL_ENV, default).upper()


def get_source_date_epoch() -> Optional[int]:
    """Return ``SOURCE_DATE_EPOCH`` as an int, or ``None`` when unset or malformed."""
    value = os.environ.get(SOURCE_DATE_EPOCH_ENV, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None
