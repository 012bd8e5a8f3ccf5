"""Ordered publication pipeline: generate, sign, aggregate, hash, archive, upload."""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from central_publisher.modules.publishing.bundle import (
    aggregate,
    build_archive,
    compute_directory_hashes,
    normalize_algorithms,
)
from central_publisher.modules.publishing.domain import (
    BuildLayout,
    ComponentType,
    Coordinate,
    Credentials,
    FilesystemError,
    PipelineReport,
    PreconditionError,
    PublishingType,
    RenameRule,
    SourceDirectory,
    StageError,
    StageRecord,
)
from central_publisher.modules.publishing.remote import CentralPortalClient
from central_publisher.settings import Settings
from .generation import ArtifactGenerator, discover_artifacts
from .signing import Signer


class Stage(str, Enum):
    GENERATE_ARTIFACTS = "generateArtifacts"
    SIGN_ARTIFACTS = "signArtifacts"
    AGGREGATE_FILES = "aggregateFiles"
    COMPUTE_HASH = "computeHash"
    CREATE_ARCHIVE = "createArchive"
    UPLOAD = "upload"

    @classmethod
    def ordered(cls) -> List["Stage"]:
        return list(cls)


@dataclass(frozen=True)
class PublicationConfig:
    """Everything a pipeline run needs, passed explicitly to each stage."""

    coordinate: Coordinate
    layout: BuildLayout
    component_type: ComponentType = ComponentType.LIBRARY
    publishing_type: PublishingType = PublishingType.AUTOMATIC
    algorithms: Tuple[str, ...] = ("md5", "sha1", "sha256", "sha512")
    libs_exclude: Tuple[str, ...] = ("*-plain.jar",)
    credentials: Optional[Credentials] = field(default=None, repr=False)
    hash_workers: int = 4

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "PublicationConfig":
        values = dict(
            coordinate=Coordinate(
                group_id=settings.group_id,
                artifact_id=settings.artifact_id,
                version=settings.version,
            ),
            layout=BuildLayout(Path(settings.build_dir)),
            component_type=ComponentType.parse(settings.component_type),
            publishing_type=PublishingType.parse(settings.publishing_type),
            algorithms=tuple(settings.digest_algorithms),
            libs_exclude=tuple(settings.libs_exclude),
            credentials=Credentials(settings.username or "", settings.password or ""),
            hash_workers=settings.hash_workers,
        )
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    @property
    def staging_dir(self) -> Path:
        return self.layout.staging_dir(self.coordinate)

    def source_directories(self) -> List[SourceDirectory]:
        is_catalog = self.component_type is ComponentType.VERSION_CATALOG
        return [
            SourceDirectory(
                self.layout.libs_dir,
                RenameRule.LIBS,
                required=not is_catalog,
                exclude=self.libs_exclude,
            ),
            SourceDirectory(self.layout.publication_dir, RenameRule.POM, required=True),
            SourceDirectory(self.layout.catalog_dir, RenameRule.VERSION_CATALOG, required=is_catalog),
        ]


class PublicationPipeline:
    """Run the publication stages strictly in order, halting on the first failure."""

    def __init__(
        self,
        config: PublicationConfig,
        *,
        generator: ArtifactGenerator,
        signer: Signer,
        client: Optional[CentralPortalClient] = None,
    ) -> None:
        self.config = config
        self.generator = generator
        self.signer = signer
        self.client = client
        self.log = logging.getLogger(self.__class__.__name__)
        self._actions: Dict[Stage, Callable[[PipelineReport], List[Path]]] = {
            Stage.GENERATE_ARTIFACTS: self.generate_artifacts,
            Stage.SIGN_ARTIFACTS: self.sign_artifacts,
            Stage.AGGREGATE_FILES: self.aggregate_files,
            Stage.COMPUTE_HASH: self.compute_hash,
            Stage.CREATE_ARCHIVE: self.create_archive,
            Stage.UPLOAD: self.upload,
        }

    def stages_until(self, until: Stage) -> List[Stage]:
        ordered = Stage.ordered()
        return ordered[: ordered.index(until) + 1]

    def check_preconditions(self, stages: Sequence[Stage]) -> None:
        self.config.coordinate.validate()
        normalize_algorithms(self.config.algorithms)
        if Stage.UPLOAD in stages:
            if self.client is None:
                raise PreconditionError("upload requested but no portal client configured")
            if self.config.credentials is None:
                raise PreconditionError("upload requested but no credentials configured")
            self.config.credentials.validate()

    def run(self, until: Stage = Stage.UPLOAD) -> PipelineReport:
        stages = self.stages_until(until)
        self.check_preconditions(stages)
        report = PipelineReport(coordinate=self.config.coordinate)
        self.log.info(
            "Publishing %s (%s) stages=%s",
            self.config.coordinate.deployment_name,
            self.config.component_type.value,
            ",".join(stage.value for stage in stages),
        )
        for stage in stages:
            self.log.info("Executing '%s' stage...", stage.value)
            start = time.perf_counter()
            try:
                outputs = self._actions[stage](report)
                self._check_outputs(stage, outputs)
            except Exception as exc:
                self.log.error("Stage %s failed: %s", stage.value, exc)
                raise StageError(stage.value, exc) from exc
            elapsed = time.perf_counter() - start
            report.stages.append(StageRecord(stage=stage.value, outputs=outputs, elapsed_secs=elapsed))
            self.log.info("Stage %s finished with %d outputs (%.2fs)", stage.value, len(outputs), elapsed)
        return report

    @staticmethod
    def _check_outputs(stage: Stage, outputs: Sequence[Path]) -> None:
        missing = [str(path) for path in outputs if not Path(path).is_file()]
        if missing:
            raise FilesystemError(f"{stage.value} did not produce: {', '.join(missing)}")

    # ------------------------------------------------------------------ stages
    def generate_artifacts(self, report: PipelineReport) -> List[Path]:
        self.generator.generate(self.config.component_type.generation_tasks)
        artifacts = discover_artifacts(self.config.layout, self.config.libs_exclude)
        if not artifacts:
            raise PreconditionError(f"no publishable artifacts found under {self.config.layout.build_dir}")
        for artifact in artifacts:
            self.log.info("Publishable %s artifact %s", artifact.role.value, artifact.name)
        return [artifact.path for artifact in artifacts]

    def sign_artifacts(self, report: PipelineReport) -> List[Path]:
        signatures: List[Path] = []
        for artifact in discover_artifacts(self.config.layout, self.config.libs_exclude):
            signatures.append(Path(self.signer.sign(artifact.path)))
        return signatures

    def aggregate_files(self, report: PipelineReport) -> List[Path]:
        staging_root = self.config.layout.staging_root
        if staging_root.exists():
            shutil.rmtree(staging_root)
        return aggregate(
            self.config.staging_dir,
            self.config.coordinate.artifact_id,
            self.config.coordinate.version,
            self.config.source_directories(),
        )

    def compute_hash(self, report: PipelineReport) -> List[Path]:
        return compute_directory_hashes(
            self.config.staging_dir,
            self.config.algorithms,
            max_workers=self.config.hash_workers,
        )

    def create_archive(self, report: PipelineReport) -> List[Path]:
        archive_path = self.config.layout.archive_path
        build_archive(self.config.layout.staging_root, archive_path)
        report.archive_path = archive_path
        return [archive_path]

    def upload(self, report: PipelineReport) -> List[Path]:
        archive_path = report.archive_path or self.config.layout.archive_path
        report.receipt = self.client.upload(
            self.config.coordinate,
            self.config.publishing_type,
            archive_path,
            self.config.credentials,
        )
        return []
