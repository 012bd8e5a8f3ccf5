"""Exception hierarchy for the publishing module."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .models import ErrorEnvelope


class PublishError(RuntimeError):
    """Base class for every failure raised by the publisher."""


class PreconditionError(PublishError):
    """Raised before any I/O when required inputs are missing or invalid."""


class FilesystemError(PublishError):
    """Raised when a file cannot be read, written or located."""


class RenameCollisionError(FilesystemError):
    """Two distinct source files resolved to the same staged name."""

    def __init__(self, target_name: str, first: str, second: str) -> None:
        super().__init__(f"rename collision on {target_name!r}: {first} and {second}")
        self.target_name = target_name
        self.first = first
        self.second = second


class SigningError(FilesystemError):
    """The signing capability failed to produce a signature file."""


class NetworkError(PublishError):
    """Transport failure while talking to the portal."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None) -> None:
        detail = f"{operation} failed"
        if status_code is not None:
            detail += f" (status={status_code})"
        super().__init__(f"{detail}: {message}")
        self.operation = operation
        self.message = message
        self.status_code = status_code


class RemoteCallError(NetworkError):
    """The portal answered with a non-2xx status."""

    def __init__(self, operation: str, status_code: int, envelope: "ErrorEnvelope") -> None:
        super().__init__(operation, envelope.error.message, status_code=status_code)
        self.envelope = envelope


class MalformedResponseError(PublishError):
    """A response body did not match the expected envelope."""

    def __init__(self, body: str) -> None:
        super().__init__(f"malformed response body: {body[:200]!r}")
        self.body = body


class StageError(PublishError):
    """A pipeline stage failed; later stages were not run."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(f"stage {stage} failed: {cause}")
        self.stage = stage
        self.cause = cause
