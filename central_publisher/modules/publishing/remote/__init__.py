from .central_client import CentralPortalClient

__all__ = ["CentralPortalClient"]
