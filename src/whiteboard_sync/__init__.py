"""
Whiteboard Sync

Persistence of collaborative whiteboard scenes and attachments
to a remote HTTP backend.
"""

__version__ = "1.0.0"

from .application import FileSyncService, SceneSyncService
from .domain.errors import (
    WhiteboardSyncError,
    BackendError,
    BackendConnectionError,
    BackendTimeoutError,
    BackendResponseError,
    FileDecodeError,
    InvalidSceneDocumentError,
)
from .domain.value_objects import (
    CollabSession,
    SceneDocument,
    FileUpload,
    DecodedFile,
    BinaryFileData,
    FileUploadResult,
    FileDownloadResult,
)

__all__ = [
    "SceneSyncService",
    "FileSyncService",
    "WhiteboardSyncError",
    "BackendError",
    "BackendConnectionError",
    "BackendTimeoutError",
    "BackendResponseError",
    "FileDecodeError",
    "InvalidSceneDocumentError",
    "CollabSession",
    "SceneDocument",
    "FileUpload",
    "DecodedFile",
    "BinaryFileData",
    "FileUploadResult",
    "FileDownloadResult",
]
