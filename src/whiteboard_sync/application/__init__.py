"""
Application Layer

Orchestrates domain objects and ports to execute use cases.
"""

from .services import FileSyncService, SceneSyncService, room_id_from_prefix

__all__ = [
    "SceneSyncService",
    "FileSyncService",
    "room_id_from_prefix",
]
