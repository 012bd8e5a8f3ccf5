"""Models exchanged between the publishing stages and the portal."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ValidationError

from .artifact import Coordinate
from .constants import BUNDLE_FILE_NAME, UNKNOWN_ERROR_PREFIX
from .errors import MalformedResponseError


class ErrorDetail(BaseModel):
    message: str


class ErrorEnvelope(BaseModel):
    """Portal error body: ``{"error": {"message": "..."}}``."""

    error: ErrorDetail

    @classmethod
    def parse_strict(cls, body: str) -> "ErrorEnvelope":
        try:
            return cls.model_validate_json(body)
        except ValidationError as exc:
            raise MalformedResponseError(body) from exc

    @classmethod
    def from_body(cls, body: str) -> "ErrorEnvelope":
        """Decode ``body``; fall back to an ``Unknown Error`` envelope carrying the raw text."""
        try:
            return cls.parse_strict(body)
        except MalformedResponseError:
            return cls(error=ErrorDetail(message=f"{UNKNOWN_ERROR_PREFIX}: {body}"))


@dataclass
class PortalResponse:
    """A successful portal answer; ``payload`` is the decoded JSON or ``None``."""

    status_code: int
    text: str
    payload: Any = None

    @classmethod
    def from_text(cls, status_code: int, text: str) -> "PortalResponse":
        payload = None
        if text.strip():
            try:
                payload = json.loads(text)
            except json.JSONDecodeError:
                payload = None
        return cls(status_code=status_code, text=text, payload=payload)

    def pretty(self) -> str:
        if self.payload is None:
            return self.text
        return json.dumps(self.payload, indent=2, ensure_ascii=False)


@dataclass
class DeploymentReceipt:
    deployment_id: str
    response: PortalResponse

    @classmethod
    def from_response(cls, response: PortalResponse) -> "DeploymentReceipt":
        payload = response.payload
        if isinstance(payload, str):
            deployment_id = payload
        elif isinstance(payload, dict):
            deployment_id = str(payload.get("deploymentId") or "")
        else:
            deployment_id = response.text
        deployment_id = deployment_id.strip()
        if not deployment_id:
            raise MalformedResponseError(response.text)
        return cls(deployment_id=deployment_id, response=response)


class RenameRule(str, Enum):
    LIBS = "libs"
    POM = "pom"
    VERSION_CATALOG = "version-catalog"


@dataclass(frozen=True)
class SourceDirectory:
    """A directory feeding the staging area together with its rename rule."""

    path: Path
    rule: RenameRule
    required: bool = False
    exclude: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BuildLayout:
    """Where the host build leaves its outputs and where bundles are staged."""

    build_dir: Path

    @property
    def libs_dir(self) -> Path:
        return self.build_dir / "libs"

    @property
    def publication_dir(self) -> Path:
        return self.build_dir / "publications" / "maven"

    @property
    def catalog_dir(self) -> Path:
        return self.build_dir / "version-catalog"

    @property
    def staging_root(self) -> Path:
        return self.build_dir / "upload"

    @property
    def archive_path(self) -> Path:
        return self.build_dir / BUNDLE_FILE_NAME

    def staging_dir(self, coordinate: Coordinate) -> Path:
        return self.staging_root.joinpath(*coordinate.path_segments)


@dataclass
class StageRecord:
    stage: str
    outputs: list = field(default_factory=list)
    elapsed_secs: float = 0.0


@dataclass
class PipelineReport:
    coordinate: Coordinate
    stages: list = field(default_factory=list)
    archive_path: Optional[Path] = None
    receipt: Optional[DeploymentReceipt] = None

    @property
    def completed_stages(self) -> list:
        return [record.stage for record in self.stages]
