"""
Whiteboard Sync Errors

Error types raised by the persistence layer.
"""

from typing import Any, Optional


class WhiteboardSyncError(Exception):
    """Base class for whiteboard sync errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class BackendError(WhiteboardSyncError):
    """The whiteboard backend could not serve a request."""

    def __init__(
        self,
        message: str,
        url: str = "",
        original_error: Optional[Exception] = None,
    ):
        self.url = url
        self.original_error = original_error
        super().__init__(message, details={"url": url})


class BackendConnectionError(BackendError):
    """Transport failure while talking to the backend."""

    def __init__(self, url: str, reason: str = "", original_error: Optional[Exception] = None):
        self.reason = reason
        super().__init__(
            f"Failed to connect to whiteboard backend at {url}: {reason}",
            url=url,
            original_error=original_error,
        )


class BackendTimeoutError(BackendError):
    """Backend did not answer in time."""

    def __init__(self, url: str, original_error: Optional[Exception] = None):
        super().__init__(
            f"Whiteboard backend at {url} timed out",
            url=url,
            original_error=original_error,
        )


class BackendResponseError(BackendError):
    """Backend answered with an unusable response."""

    def __init__(
        self,
        url: str,
        message: str = "",
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.status_code = status_code
        prefix = f"Whiteboard backend at {url} returned"
        if status_code is not None:
            prefix = f"{prefix} {status_code}"
        super().__init__(
            f"{prefix}: {message}" if message else prefix,
            url=url,
            original_error=original_error,
        )


class FileDecodeError(WhiteboardSyncError):
    """An attachment payload could not be decoded."""

    def __init__(self, file_id: str, reason: str = ""):
        self.file_id = file_id
        self.reason = reason
        super().__init__(
            f"Failed to decode file {file_id}: {reason}",
            details={"file_id": file_id},
        )


class InvalidSceneDocumentError(WhiteboardSyncError):
    """A stored scene document does not carry an element list."""

    def __init__(self, room_id: str, reason: str = ""):
        self.room_id = room_id
        self.reason = reason
        super().__init__(
            f"Invalid scene document for room {room_id}: {reason}",
            details={"room_id": room_id},
        )
