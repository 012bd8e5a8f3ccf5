"""Artifact generation via the host build tool and discovery of its outputs."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from central_publisher.modules.publishing.bundle.aggregator import is_excluded
from central_publisher.modules.publishing.bundle.hashing import is_digest_file
from central_publisher.modules.publishing.domain import (
    Artifact,
    BuildLayout,
    FilesystemError,
)
from central_publisher.modules.publishing.domain.constants import SIGNATURE_EXTENSION


class ArtifactGenerator(Protocol):
    """Produces the raw build outputs for the given build tasks."""

    def generate(self, tasks: Sequence[str]) -> None:  # pragma: no cover - interface
        ...


class BuildToolGenerator:
    """Run the configured build command with the generation tasks appended.

    Without a command the artifacts are expected to exist already (built by a
    previous build invocation) and only discovery runs.
    """

    def __init__(self, command: Optional[str] = None, cwd: Optional[Path] = None, timeout: Optional[float] = None) -> None:
        self.command = shlex.split(command) if command else []
        self.cwd = cwd
        self.timeout = timeout
        self.log = logging.getLogger(self.__class__.__name__)

    def generate(self, tasks: Sequence[str]) -> None:
        if not self.command:
            self.log.info("No build command configured, using existing outputs for %s", ",".join(tasks))
            return
        cmd = [*self.command, *tasks]
        self.log.info("Running build command: %s", " ".join(cmd))
        try:
            completed = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise FilesystemError(f"build command {cmd[0]} could not run: {exc}") from exc
        if completed.stdout:
            self.log.debug("build stdout: %s", completed.stdout.strip())
        if completed.returncode != 0:
            raise FilesystemError(
                f"build command exited with {completed.returncode}: {(completed.stderr or '').strip()[:2000]}"
            )


def _is_derived(path: Path) -> bool:
    return path.suffix == f".{SIGNATURE_EXTENSION}" or is_digest_file(path)


def discover_artifacts(layout: BuildLayout, libs_exclude: Sequence[str] = ()) -> List[Artifact]:
    """List the files the publication declares as publishable, in a stable order.

    Signatures and digest sidecars left by an earlier run are not artifacts.
    """
    artifacts: List[Artifact] = []
    for directory in (layout.libs_dir, layout.publication_dir, layout.catalog_dir):
        if not directory.is_dir():
            continue
        for path in sorted(p for p in directory.rglob("*") if p.is_file()):
            if _is_derived(path):
                continue
            if directory == layout.libs_dir and is_excluded(path.name, libs_exclude):
                continue
            artifacts.append(Artifact.from_path(path))
    return artifacts
