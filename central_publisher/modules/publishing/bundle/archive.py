"""Zip bundle creation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List
from zipfile import ZIP_DEFLATED, ZipFile

from central_publisher.modules.publishing.domain import FilesystemError

log = logging.getLogger(__name__)


def build_archive(source_directory: Path, destination: Path) -> List[str]:
    """Zip every file under ``source_directory`` into ``destination``.

    Member names are POSIX paths relative to ``source_directory`` and are
    written in sorted order. An existing archive is replaced; the destination
    is never archived into itself.
    """
    source_directory = Path(source_directory)
    destination = Path(destination)
    if not source_directory.is_dir():
        raise FilesystemError(f"archive source directory does not exist: {source_directory}")

    tmp_archive = destination.with_name(destination.name + ".tmp")
    skipped = {destination.resolve(), tmp_archive.resolve()}
    files = sorted(
        (path for path in source_directory.rglob("*") if path.is_file() and path.resolve() not in skipped),
        key=lambda path: path.relative_to(source_directory).as_posix(),
    )

    log.info("Creating archive %s from %s (%d files)", destination, source_directory, len(files))
    members: List[str] = []
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with ZipFile(tmp_archive, "w", compression=ZIP_DEFLATED) as zf:
            for path in files:
                arcname = path.relative_to(source_directory).as_posix()
                zf.write(path, arcname)
                members.append(arcname)
        tmp_archive.replace(destination)
    except OSError as exc:
        tmp_archive.unlink(missing_ok=True)
        raise FilesystemError(f"cannot create archive {destination}: {exc}") from exc
    log.info("Archive ready %s", destination)
    return members
