"""Archive extraction."""

from __future__ import annotations

import tarfile
import zipfile
from pathlib import Path
from typing import Iterable

from encore_release.errors import BuildError


def _check_members(names: Iterable[str], dest: Path) -> None:
    root = dest.resolve()
    for name in names:
        target = (root / name).resolve()
        if target != root and root not in target.parents:
            raise BuildError(f"archive member escapes destination: {name}")


def extract_archive(archive: Path, dest: Path) -> None:
    """Extract a ``.tar.gz``/``.tgz`` or ``.zip`` archive into ``dest``.

    Parameters
    ----------
    archive : Path
        The archive to extract.
    dest : Path
        Destination directory. Created if missing.

    Raises
    ------
    BuildError
        If the format is unsupported, the archive is corrupt, or a member would be
        written outside ``dest``.
    """
    archive = Path(archive)
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    name = archive.name

    try:
        if name.endswith((".tar.gz", ".tgz")):
            with tarfile.open(archive, "r:gz") as tar:
                members = tar.getmembers()
                _check_members((m.name for m in members), dest)
                for m in members:
                    if m.issym() or m.islnk():
                        _check_members([str(Path(m.name).parent / m.linkname)], dest)
                if hasattr(tarfile, "data_filter"):
                    tar.extractall(dest, filter="data")
                else:
                    tar.extractall(dest)
        elif name.endswith(".zip"):
            with zipfile.ZipFile(archive) as zf:
                _check_members(zf.namelist(), dest)
                zf.extractall(dest)
        else:
            raise BuildError(f"unsupported archive format: {name}")
    except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
        raise BuildError(f"extract {name}") from e
