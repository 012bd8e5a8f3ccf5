from .manager import OperationResult, PublishingService

__all__ = ["OperationResult", "PublishingService"]
