"""Deterministic ``.tar.gz`` archiving of a directory tree."""

from __future__ import annotations

import gzip
import os
import tarfile
from pathlib import Path
from typing import List, Optional, Tuple

from encore_release.env import get_source_date_epoch
from encore_release.errors import BuildError


def _iter_tree(root: Path) -> Tuple[List[str], List[str]]:
    dirs: List[str] = []
    files: List[str] = []
    for cur_root, cur_dirs, cur_files in os.walk(root):
        cur_dirs.sort()
        rel_root = Path(cur_root).relative_to(root)
        for d in cur_dirs:
            dirs.append((rel_root / d).as_posix())
        for f in sorted(cur_files):
            files.append((rel_root / f).as_posix())
    return sorted(dirs), sorted(files)


def _normalize(info: tarfile.TarInfo, mtime: Optional[int]) -> tarfile.TarInfo:
    info.uid = info.gid = 0
    info.uname = info.gname = ""
    if mtime is not None:
        info.mtime = mtime
    return info


def tar_gzip(src_dir: Path, out_file: Path) -> Path:
    """Write a gzip-compressed tar of ``src_dir`` to ``out_file``.

    Member names are relative to ``src_dir`` and sorted, and ownership is reset, so
    building the same tree twice yields the same archive content. When
    ``SOURCE_DATE_EPOCH`` is set it is used for every member's mtime and for the gzip
    header.

    Parameters
    ----------
    src_dir : Path
        The directory to archive.
    out_file : Path
        The archive to write. Its parent directory is created if missing.

    Returns
    -------
    Path
        ``out_file``.

    Raises
    ------
    BuildError
        If ``src_dir`` is not a directory or writing the archive fails.
    """
    src_dir = Path(src_dir)
    out_file = Path(out_file)
    if not src_dir.is_dir():
        raise BuildError(f"not a directory: {src_dir}")

    epoch = get_source_date_epoch()
    dirs, files = _iter_tree(src_dir)
    try:
        out_file.parent.mkdir(parents=True, exist_ok=True)
        with open(out_file, "wb") as raw, gzip.GzipFile(
            filename="", mode="wb", fileobj=raw, mtime=epoch or 0
        ) as gz, tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT) as tar:
            for rel in dirs:
                tar.addfile(_normalize(tar.gettarinfo(src_dir / rel, arcname=rel), epoch))
            for rel in files:
                path = src_dir / rel
                info = _normalize(tar.gettarinfo(path, arcname=rel), epoch)
                if info.isreg():
                    with path.open("rb") as fh:
                        tar.addfile(info, fh)
                else:
                    tar.addfile(info)
    except OSError as e:
        out_file.unlink(missing_ok=True)
        raise BuildError(f"tar gzip {src_dir}") from e
    return out_file
