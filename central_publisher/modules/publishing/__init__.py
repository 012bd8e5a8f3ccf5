"""Publishing module exports."""

from .service.manager import PublishingService
from .controller import router as publishing_router

__all__ = ["PublishingService", "publishing_router"]
