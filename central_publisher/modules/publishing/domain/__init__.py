from .artifact import (
    Artifact,
    ArtifactRole,
    ComponentType,
    Coordinate,
    Credentials,
    PublishingType,
)
from .errors import (
    FilesystemError,
    MalformedResponseError,
    NetworkError,
    PreconditionError,
    PublishError,
    RemoteCallError,
    RenameCollisionError,
    SigningError,
    StageError,
)
from .models import (
    BuildLayout,
    DeploymentReceipt,
    ErrorDetail,
    ErrorEnvelope,
    PipelineReport,
    PortalResponse,
    RenameRule,
    SourceDirectory,
    StageRecord,
)

__all__ = [
    "Artifact",
    "ArtifactRole",
    "ComponentType",
    "Coordinate",
    "Credentials",
    "PublishingType",
    "FilesystemError",
    "MalformedResponseError",
    "NetworkError",
    "PreconditionError",
    "PublishError",
    "RemoteCallError",
    "RenameCollisionError",
    "SigningError",
    "StageError",
    "BuildLayout",
    "DeploymentReceipt",
    "ErrorDetail",
    "ErrorEnvelope",
    "PipelineReport",
    "PortalResponse",
    "RenameRule",
    "SourceDirectory",
    "StageRecord",
]
