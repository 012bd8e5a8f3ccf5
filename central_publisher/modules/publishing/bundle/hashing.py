"""Checksum sidecar generation for staged files."""

from __future__ import annotations

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from central_publisher.modules.publishing.domain import FilesystemError, PreconditionError

log = logging.getLogger(__name__)

# identifier -> hashlib name; the identifier doubles as the sidecar extension
SUPPORTED_ALGORITHMS: Dict[str, str] = {
    "md5": "md5",
    "sha1": "sha1",
    "sha256": "sha256",
    "sha512": "sha512",
}

_CHUNK_SIZE = 65536


def normalize_algorithms(algorithms: Iterable[str]) -> List[str]:
    """Return canonical identifiers in first-seen order, rejecting unknown ones."""
    result: List[str] = []
    for raw in algorithms:
        name = (raw or "").strip().lower().replace("-", "").replace("_", "")
        if name not in SUPPORTED_ALGORITHMS:
            allowed = ", ".join(SUPPORTED_ALGORITHMS)
            raise PreconditionError(f"unsupported digest algorithm {raw!r} (supported: {allowed})")
        if name not in result:
            result.append(name)
    if not result:
        raise PreconditionError("at least one digest algorithm is required")
    return result


def is_digest_file(path: Path) -> bool:
    return path.suffix.lstrip(".").lower() in SUPPORTED_ALGORITHMS


def file_digest(path: Path, algorithm: str) -> str:
    digest = hashlib.new(SUPPORTED_ALGORITHMS[algorithm])
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _hash_one(path: Path, algorithms: Sequence[str]) -> List[Path]:
    digests = {}
    try:
        for algorithm in algorithms:
            digests[algorithm] = file_digest(path, algorithm)
    except OSError as exc:
        raise FilesystemError(f"cannot read {path}: {exc}") from exc
    written: List[Path] = []
    for algorithm, value in digests.items():
        target = path.with_name(f"{path.name}.{algorithm}")
        try:
            target.write_text(value, encoding="ascii")
        except OSError as exc:
            for partial in written:
                partial.unlink(missing_ok=True)
            raise FilesystemError(f"cannot write {target}: {exc}") from exc
        written.append(target)
    return written


def _hashable_files(directory: Path) -> List[Path]:
    return sorted(p for p in directory.rglob("*") if p.is_file() and not is_digest_file(p))


def compute_directory_hashes(
    directory: Path,
    algorithms: Iterable[str],
    *,
    max_workers: int = 4,
) -> List[Path]:
    """Write ``{name}.{algorithm}`` next to every non-digest file under ``directory``.

    Each sidecar holds the lowercase hex digest without a trailing newline.
    On failure every sidecar written by this call is removed before the error
    propagates.
    """
    directory = Path(directory)
    selected = normalize_algorithms(algorithms)
    if not directory.is_dir():
        raise FilesystemError(f"hash directory does not exist: {directory}")

    files = _hashable_files(directory)
    log.info("Hashing %d files in %s with %s", len(files), directory, ",".join(selected))

    written: List[Path] = []
    failure: Optional[FilesystemError] = None
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        futures = {pool.submit(_hash_one, path, selected): path for path in files}
        for future in as_completed(futures):
            try:
                written.extend(future.result())
            except FilesystemError as exc:
                failure = failure or exc

    if failure is not None:
        for sidecar in written:
            sidecar.unlink(missing_ok=True)
        log.error("Hashing aborted in %s: %s", directory, failure)
        raise failure

    return sorted(written)


def verify_directory_hashes(directory: Path, algorithms: Iterable[str]) -> List[Path]:
    """Return the sidecars under ``directory`` that are missing or do not match their file."""
    directory = Path(directory)
    selected = normalize_algorithms(algorithms)
    if not directory.is_dir():
        raise FilesystemError(f"hash directory does not exist: {directory}")
    mismatched: List[Path] = []
    for path in _hashable_files(directory):
        for algorithm in selected:
            sidecar = path.with_name(f"{path.name}.{algorithm}")
            if not sidecar.is_file():
                mismatched.append(sidecar)
                continue
            try:
                matches = sidecar.read_bytes() == file_digest(path, algorithm).encode("ascii")
            except OSError as exc:
                raise FilesystemError(f"cannot verify {sidecar}: {exc}") from exc
            if not matches:
                mismatched.append(sidecar)
    return mismatched
