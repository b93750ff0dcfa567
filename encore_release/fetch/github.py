"""Download release assets from GitHub."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from encore_release.env import get_download_path, get_github_token
from encore_release.errors import BuildError
from encore_release.logging import LoggerLike, get_logger

logger = get_logger("fetch.github")

GITHUB_API_URL = "https://api.github.com"
ARCHIVE_EXTENSIONS = (".tar.gz", ".tgz", ".zip")
_CHUNK_SIZE = 1 << 20
_TIMEOUT = 60


def _headers(accept: str = "application/vnd.github+json") -> Dict[str, str]:
    headers = {"Accept": accept, "User-Agent": "encore-release"}
    token = get_github_token()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def get_latest_release(
    owner: str, repo: str, *, session: Optional[requests.Session] = None
) -> Dict[str, Any]:
    """Return the JSON description of the latest release of ``owner/repo``.

    Raises
    ------
    BuildError
        If the GitHub API cannot be reached or answers with an error.
    """
    http = session or requests
    url = f"{GITHUB_API_URL}/repos/{owner}/{repo}/releases/latest"
    try:
        resp = http.get(url, headers=_headers(), timeout=_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise BuildError(f"get latest release of {owner}/{repo}") from e
    return resp.json()


def select_asset(assets: List[Dict[str, Any]], goos: str, goarch: str) -> Dict[str, Any]:
    """Pick the archive asset built for ``goos``/``goarch``.

    An asset matches when its name contains ``<goos>_<goarch>`` and ends with one of
    the supported archive extensions.

    Raises
    ------
    BuildError
        If no asset matches.
    """
    needle = f"{goos}_{goarch}"
    for asset in assets:
        name = asset.get("name", "")
        if needle in name and name.endswith(ARCHIVE_EXTENSIONS):
            return asset
    raise BuildError(f"no release asset found for {goos}/{goarch}")


def download_asset(
    asset: Dict[str, Any],
    dest_dir: Path,
    *,
    session: Optional[requests.Session] = None,
    log: Optional[LoggerLike] = None,
) -> Path:
    """Download ``asset`` into ``dest_dir``, reusing an existing file of the same size."""
    log = log or logger
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest = dest_dir / asset["name"]
    size = asset.get("size")
    if dest.is_file() and size is not None and dest.stat().st_size == size:
        log.info("using cached %s", dest)
        return dest

    http = session or requests
    url = asset["browser_download_url"]
    tmp = dest.with_name(dest.name + ".part")
    log.info("downloading %s", url)
    try:
        with http.get(
            url, headers=_headers("application/octet-stream"), stream=True, timeout=_TIMEOUT
        ) as resp:
            resp.raise_for_status()
            with tmp.open("wb") as fh:
                for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
    except requests.RequestException as e:
        tmp.unlink(missing_ok=True)
        raise BuildError(f"download {asset['name']}") from e

    tmp.replace(dest)
    return dest


def download_latest_github_release(
    owner: str,
    repo: str,
    goos: str,
    goarch: str,
    *,
    session: Optional[requests.Session] = None,
    dest_dir: Optional[Path] = None,
    log: Optional[LoggerLike] = None,
) -> Path:
    """Download the latest release archive of ``owner/repo`` for a platform.

    Parameters
    ----------
    owner : str
        Repository owner, e.g. ``encoredev``.
    repo : str
        Repository name, e.g. ``go``.
    goos : str
        Target OS.
    goarch : str
        Target architecture.
    session : Optional[requests.Session]
        HTTP session to use. Defaults to module-level ``requests``.
    dest_dir : Optional[Path]
        Download directory. Defaults to ``<cache>/downloads/<owner>/<repo>/<tag>``.
    log : Optional[LoggerLike]
        Logger to report progress on.

    Returns
    -------
    Path
        The downloaded archive.

    Raises
    ------
    BuildError
        If the release cannot be resolved or downloaded.
    """
    log = log or logger
    release = get_latest_release(owner, repo, session=session)
    tag = release.get("tag_name") or "latest"
    asset = select_asset(release.get("assets", []), goos, goarch)
    log.info("latest %s/%s release is %s, asset %s", owner, repo, tag, asset["name"])

    if dest_dir is None:
        dest_dir = get_download_path() / owner / repo / tag
    return download_asset(asset, dest_dir, session=session, log=log)
