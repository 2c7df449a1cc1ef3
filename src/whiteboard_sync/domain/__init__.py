"""
Whiteboard Domain Layer

Value objects, scene helpers and errors for scene and attachment persistence.
"""

from .errors import (
    WhiteboardSyncError,
    BackendError,
    BackendConnectionError,
    BackendTimeoutError,
    BackendResponseError,
    FileDecodeError,
    InvalidSceneDocumentError,
)
from .scene import get_scene_version, restore_elements
from .value_objects import (
    CollabSession,
    SceneDocument,
    FileUpload,
    DecodedFile,
    BinaryFileData,
    FileOutcome,
    FileUploadResult,
    FileDownloadResult,
)

__all__ = [
    "WhiteboardSyncError",
    "BackendError",
    "BackendConnectionError",
    "BackendTimeoutError",
    "BackendResponseError",
    "FileDecodeError",
    "InvalidSceneDocumentError",
    "get_scene_version",
    "restore_elements",
    "CollabSession",
    "SceneDocument",
    "FileUpload",
    "DecodedFile",
    "BinaryFileData",
    "FileOutcome",
    "FileUploadResult",
    "FileDownloadResult",
]
