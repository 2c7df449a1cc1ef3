"""
Whiteboard backend HTTP client.

Implements IWhiteboardBackendPort on top of httpx:
- One JSON scene document per room
- One binary blob per (room, file) pair
- Transport failures mapped to BackendError subclasses

No retries are performed here; callers decide how to recover.
"""

import json
from typing import Any, Optional
from urllib.parse import quote

import httpx

from whiteboard_sync.domain.errors import (
    BackendConnectionError,
    BackendResponseError,
    BackendTimeoutError,
)
from whiteboard_sync.domain.ports import IWhiteboardBackendPort
from whiteboard_sync.domain.value_objects import DEFAULT_BINARY_MIME_TYPE, SceneDocument
from whiteboard_sync.infrastructure.config import settings
from whiteboard_sync.infrastructure.logging import get_logger


logger = get_logger(__name__)


class WhiteboardClient(IWhiteboardBackendPort):
    """
    Async HTTP client for the whiteboard backend.

    Implements IWhiteboardBackendPort interface.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        connect_timeout: Optional[float] = None,
        read_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize whiteboard client.

        Args:
            base_url: Base URL of the whiteboard endpoints
            connect_timeout: Connect timeout (seconds)
            read_timeout: Read timeout (seconds)
            transport: Custom httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.base_url = (base_url or settings.base_url).rstrip("/")
        connect = connect_timeout if connect_timeout is not None else settings.connect_timeout
        read = read_timeout if read_timeout is not None else settings.read_timeout
        self.timeout = httpx.Timeout(read, connect=connect, read=read)
        self._transport = transport

        # Lazy-initialized async client
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self) -> None:
        """
        Close the HTTP client.

        Implementation of IWhiteboardBackendPort.close().
        """
        if self._client:
            await self._client.aclose()
            self._client = None

    def room_url(self, room_id: str) -> str:
        return f"{self.base_url}/{quote(room_id, safe='')}"

    def file_url(self, room_id: str, file_id: str) -> str:
        return f"{self.room_url(room_id)}/{quote(file_id, safe='')}"

    async def save_scene_document(
        self,
        room_id: str,
        document: SceneDocument,
    ) -> Optional[Any]:
        """
        Overwrite the scene document of a room.

        Implementation of IWhiteboardBackendPort.save_scene_document().
        """
        url = self.room_url(room_id)
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        logger.debug(
            "Saving scene document",
            room_id=room_id,
            scene_version=document.scene_version,
            element_count=len(document.elements),
        )

        response = await self._send(
            "POST",
            url,
            content=json.dumps(document.to_dict()),
            headers=headers,
        )
        if response.status_code >= 400:
            logger.warning(
                "Scene save returned error status",
                room_id=room_id,
                status_code=response.status_code,
            )
        return self._parse_json(response, url)

    async def load_scene_document(self, room_id: str) -> Optional[Any]:
        """
        Fetch the scene document of a room.

        Implementation of IWhiteboardBackendPort.load_scene_document().
        """
        url = self.room_url(room_id)
        response = await self._send("GET", url, headers={"Accept": "application/json"})
        if response.status_code >= 400:
            logger.warning(
                "Scene load returned error status",
                room_id=room_id,
                status_code=response.status_code,
            )
        return self._parse_json(response, url)

    async def upload_file(self, room_id: str, file_id: str, buffer: bytes) -> None:
        """
        Store the binary payload of a single file.

        Implementation of IWhiteboardBackendPort.upload_file().
        """
        url = self.file_url(room_id, file_id)
        response = await self._send(
            "POST",
            url,
            content=bytes(buffer),
            headers={"Content-Type": DEFAULT_BINARY_MIME_TYPE},
        )
        if response.status_code >= 400:
            raise BackendResponseError(
                url,
                "file upload rejected",
                status_code=response.status_code,
            )

    async def download_file(self, room_id: str, file_id: str) -> bytes:
        """
        Fetch the raw payload of a single file.

        Implementation of IWhiteboardBackendPort.download_file().
        """
        url = self.file_url(room_id, file_id)
        response = await self._send("GET", url, params={"alt": "media"})
        if response.status_code >= 400:
            raise BackendResponseError(
                url,
                "file download failed",
                status_code=response.status_code,
            )
        return response.content

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        client = await self._get_client()
        try:
            return await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise BackendTimeoutError(url, original_error=e) from e
        except httpx.TransportError as e:
            raise BackendConnectionError(url, str(e), original_error=e) from e

    @staticmethod
    def _parse_json(response: httpx.Response, url: str) -> Optional[Any]:
        """Parse a JSON body; an empty body yields None."""
        text = response.text
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            raise BackendResponseError(
                url,
                "response body is not valid JSON",
                status_code=response.status_code,
                original_error=e,
            ) from e


# Global whiteboard client instance
_whiteboard_client: Optional[WhiteboardClient] = None


def get_whiteboard_client() -> WhiteboardClient:
    """
    Get global whiteboard client instance.

    Returns:
        WhiteboardClient instance
    """
    global _whiteboard_client

    if _whiteboard_client is None:
        _whiteboard_client = WhiteboardClient()

    return _whiteboard_client
