"""Application services."""

from routesync.application.services.sync_service import RouteSyncService

__all__ = ["RouteSyncService"]
