"""Service wiring shared by the API and the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from central_publisher.modules.publishing import PublishingService
from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires plain-Python services with shared settings."""

    settings: Settings
    publishing_service: PublishingService = field(init=False)

    def __post_init__(self) -> None:
        self.publishing_service = PublishingService(self.settings)
        log.debug(
            "Publishing service ready for %s:%s:%s",
            self.settings.group_id or "-",
            self.settings.artifact_id or "-",
            self.settings.version or "-",
        )

    def close(self) -> None:
        self.publishing_service.close()
