from .extract import extract_archive
from .github import (
    download_asset,
    download_latest_github_release,
    get_latest_release,
    select_asset,
)

__all__ = [
    "download_asset",
    "download_latest_github_release",
    "extract_archive",
    "get_latest_release",
    "select_asset",
]
