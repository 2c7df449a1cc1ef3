"""
Whiteboard Backend Port Interface

Defines the contract for the remote scene and attachment store.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from whiteboard_sync.domain.value_objects import SceneDocument


class IWhiteboardBackendPort(ABC):
    """
    Port interface for the whiteboard backend.

    One scene document per room, plus one binary blob per
    (room, file) pair.
    """

    @abstractmethod
    async def save_scene_document(
        self,
        room_id: str,
        document: SceneDocument,
    ) -> Optional[Any]:
        """
        Overwrite the scene document of a room.

        Args:
            room_id: Room identifier
            document: Document to store

        Returns:
            Parsed JSON response body, or None if the body was empty

        Raises:
            BackendError: On transport failure or unparseable body
        """
        pass

    @abstractmethod
    async def load_scene_document(self, room_id: str) -> Optional[Any]:
        """
        Fetch the scene document of a room.

        Args:
            room_id: Room identifier

        Returns:
            Parsed JSON response body, or None if the body was empty

        Raises:
            BackendError: On transport failure or unparseable body
        """
        pass

    @abstractmethod
    async def upload_file(self, room_id: str, file_id: str, buffer: bytes) -> None:
        """
        Store the binary payload of a single file.

        Raises:
            BackendError: On transport failure or error status
        """
        pass

    @abstractmethod
    async def download_file(self, room_id: str, file_id: str) -> bytes:
        """
        Fetch the raw (encoded) payload of a single file.

        Raises:
            BackendError: On transport failure or status >= 400
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Release transport resources.

        Should be called during shutdown.
        """
        pass
