"""Publishing service behind the CLI and HTTP entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from central_publisher.modules.publishing.bundle import verify_directory_hashes
from central_publisher.modules.publishing.domain import (
    ComponentType,
    Credentials,
    MalformedResponseError,
    NetworkError,
    PreconditionError,
    PublishError,
    PublishingType,
    StageError,
)
from central_publisher.modules.publishing.pipeline import (
    ArtifactGenerator,
    BuildToolGenerator,
    GpgSigner,
    PublicationConfig,
    PublicationPipeline,
    Signer,
    Stage,
)
from central_publisher.modules.publishing.remote import CentralPortalClient
from central_publisher.settings import Settings

log = logging.getLogger(__name__)


@dataclass
class OperationResult:
    ok: bool
    message: str
    data: Any = None
    kind: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload = {"status": "true" if self.ok else "false", "msg": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload

    @classmethod
    def failure(cls, exc: PublishError) -> "OperationResult":
        cause = exc.cause if isinstance(exc, StageError) else exc
        if isinstance(cause, PreconditionError):
            kind = "precondition"
        elif isinstance(cause, (NetworkError, MalformedResponseError)):
            kind = "network"
        elif isinstance(cause, PublishError):
            kind = "filesystem"
        else:
            kind = "stage"
        return cls(False, str(exc), kind=kind)


class PublishingService:
    """Wire settings, signing, generation and the portal client together."""

    def __init__(
        self,
        settings: Settings,
        *,
        client: Optional[CentralPortalClient] = None,
        signer: Optional[Signer] = None,
        generator: Optional[ArtifactGenerator] = None,
    ) -> None:
        self.settings = settings
        self.client = client or CentralPortalClient(settings)
        self.signer = signer or GpgSigner(
            executable=settings.gpg_executable,
            key_id=settings.signing_key_id,
            passphrase=settings.signing_passphrase,
        )
        self.generator = generator or BuildToolGenerator(settings.build_command)

    @property
    def credentials(self) -> Credentials:
        return Credentials(self.settings.username or "", self.settings.password or "")

    def build_config(
        self,
        *,
        publishing_type: Optional[str] = None,
        component_type: Optional[str] = None,
    ) -> PublicationConfig:
        return PublicationConfig.from_settings(
            self.settings,
            publishing_type=PublishingType.parse(publishing_type) if publishing_type else None,
            component_type=ComponentType.parse(component_type) if component_type else None,
        )

    # ------------------------------------------------------------------ entry points
    def publish(
        self,
        *,
        publishing_type: Optional[str] = None,
        component_type: Optional[str] = None,
        until: Stage = Stage.UPLOAD,
    ) -> OperationResult:
        try:
            config = self.build_config(publishing_type=publishing_type, component_type=component_type)
            pipeline = PublicationPipeline(
                config,
                generator=self.generator,
                signer=self.signer,
                client=self.client,
            )
            report = pipeline.run(until=until)
        except PublishError as exc:
            log.error("Publication failed: %s", exc)
            return OperationResult.failure(exc)

        data: Dict[str, Any] = {
            "coordinate": config.coordinate.deployment_name,
            "stages": report.completed_stages,
            "archive": str(report.archive_path) if report.archive_path else None,
        }
        if report.receipt is not None:
            data["deploymentId"] = report.receipt.deployment_id
            return OperationResult(True, "ok", data)
        return OperationResult(True, f"bundle ready at {report.archive_path}", data)

    def verify_bundle(self) -> OperationResult:
        try:
            config = self.build_config()
            mismatched = verify_directory_hashes(config.staging_dir, config.algorithms)
        except PublishError as exc:
            return OperationResult.failure(exc)
        if mismatched:
            names = [path.name for path in mismatched]
            return OperationResult(False, f"{len(names)} digest files missing or stale", names, kind="filesystem")
        return OperationResult(True, f"all digests match in {config.staging_dir}")

    def deployment_status(self, deployment_id: str) -> OperationResult:
        try:
            response = self.client.get_status(deployment_id, self.credentials)
        except PublishError as exc:
            log.error("Failed to get deployment status: %s", exc)
            return OperationResult.failure(exc)
        return OperationResult(True, "ok", response.payload if response.payload is not None else response.text)

    def drop_deployment(self, deployment_id: str) -> OperationResult:
        try:
            self.client.drop_deployment(deployment_id, self.credentials)
        except PublishError as exc:
            log.error("Failed to drop deployment: %s", exc)
            return OperationResult.failure(exc)
        return OperationResult(True, f"Deployment Dropped Successfully for deploymentId={deployment_id.strip()}")

    def close(self) -> None:
        self.client.close()
