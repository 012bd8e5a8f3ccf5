"""Collect signed build outputs into the staging directory under Central's names."""

from __future__ import annotations

import fnmatch
import logging
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from central_publisher.modules.publishing.domain import (
    FilesystemError,
    PreconditionError,
    RenameCollisionError,
    RenameRule,
    SourceDirectory,
)
from central_publisher.modules.publishing.domain.constants import (
    CATALOG_EXTENSION,
    CATALOG_SUFFIX,
    MODULE_EXTENSION,
    MODULE_SOURCE_NAME,
    POM_EXTENSION,
    POM_SOURCE_NAME,
    SIGNATURE_EXTENSION,
)

log = logging.getLogger(__name__)


def _pom_name(file_name: str, artifact_id: str, version: str) -> str:
    prefix = f"{artifact_id}-{version}"
    fixed = {
        POM_SOURCE_NAME: f"{prefix}.{POM_EXTENSION}",
        f"{POM_SOURCE_NAME}.{SIGNATURE_EXTENSION}": f"{prefix}.{POM_EXTENSION}.{SIGNATURE_EXTENSION}",
        MODULE_SOURCE_NAME: f"{prefix}.{MODULE_EXTENSION}",
        f"{MODULE_SOURCE_NAME}.{SIGNATURE_EXTENSION}": f"{prefix}.{MODULE_EXTENSION}.{SIGNATURE_EXTENSION}",
    }
    if file_name in fixed:
        return fixed[file_name]
    _, dot, extension = file_name.partition(".")
    return f"{prefix}.{extension}" if dot else f"{prefix}.{file_name}"


def _catalog_name(file_name: str, artifact_id: str, version: str) -> str:
    prefix = f"{artifact_id}-{version}"
    if file_name.endswith(CATALOG_SUFFIX):
        return f"{prefix}.{CATALOG_EXTENSION}"
    if file_name.endswith(f"{CATALOG_SUFFIX}.{SIGNATURE_EXTENSION}"):
        return f"{prefix}.{CATALOG_EXTENSION}.{SIGNATURE_EXTENSION}"
    return file_name


def staged_name(rule: RenameRule, file_name: str, artifact_id: str, version: str) -> str:
    """Name a source file receives in the staging directory."""
    if rule is RenameRule.POM:
        return _pom_name(file_name, artifact_id, version)
    if rule is RenameRule.VERSION_CATALOG:
        return _catalog_name(file_name, artifact_id, version)
    return file_name


def is_excluded(file_name: str, patterns: Iterable[str]) -> bool:
    return any(file_name == pattern or fnmatch.fnmatchcase(file_name, pattern) for pattern in patterns)


def list_source_files(source: SourceDirectory) -> List[Path]:
    if not source.path.is_dir():
        return []
    return sorted(
        path
        for path in source.path.rglob("*")
        if path.is_file() and not is_excluded(path.name, source.exclude)
    )


def plan_aggregation(
    artifact_id: str,
    version: str,
    sources: Sequence[SourceDirectory],
) -> List[Tuple[Path, str]]:
    """Resolve ``(source file, staged name)`` pairs without touching the staging area."""
    plan: List[Tuple[Path, str]] = []
    owners: Dict[str, Path] = {}
    for source in sources:
        if not source.path.is_dir():
            if source.required:
                raise PreconditionError(f"required {source.rule.value} directory is missing: {source.path}")
            log.debug("Skipping missing %s directory %s", source.rule.value, source.path)
            continue
        for path in list_source_files(source):
            target = staged_name(source.rule, path.name, artifact_id, version)
            previous: Optional[Path] = owners.get(target)
            if previous is not None and previous != path:
                raise RenameCollisionError(target, str(previous), str(path))
            owners[target] = path
            plan.append((path, target))
    return plan


def aggregate(
    staging_directory: Path,
    artifact_id: str,
    version: str,
    sources: Sequence[SourceDirectory],
) -> List[Path]:
    """Copy every source file into ``staging_directory`` under its staged name."""
    staging_directory = Path(staging_directory)
    plan = plan_aggregation(artifact_id, version, sources)
    try:
        staging_directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"cannot create staging directory {staging_directory}: {exc}") from exc

    copied: List[Path] = []
    for path, target_name in plan:
        target = staging_directory / target_name
        try:
            shutil.copy2(path, target)
        except OSError as exc:
            raise FilesystemError(f"cannot copy {path} -> {target}: {exc}") from exc
        log.info("Staged %s -> %s", path.name, target_name)
        copied.append(target)
    log.info("Aggregated %d files into %s", len(copied), staging_directory)
    return copied
