"""
Application Services

Service classes for handling use cases.
"""

from .scene_sync_service import SceneSyncService
from .file_sync_service import FileSyncService, room_id_from_prefix

__all__ = [
    "SceneSyncService",
    "FileSyncService",
    "room_id_from_prefix",
]
