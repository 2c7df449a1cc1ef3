"""
File Sync Service

Uploads and downloads binary attachments of a room in concurrent batches.
Each file succeeds or fails on its own; a batch never aborts early.
"""

import asyncio
import time
from typing import Dict, Iterable, List, Sequence

from whiteboard_sync.domain.errors import FileDecodeError
from whiteboard_sync.domain.ports import IFileCodecPort, IWhiteboardBackendPort
from whiteboard_sync.domain.value_objects import (
    DEFAULT_BINARY_MIME_TYPE,
    BinaryFileData,
    FileDownloadResult,
    FileOutcome,
    FileUpload,
    FileUploadResult,
)
from whiteboard_sync.infrastructure.logging import get_logger


logger = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def room_id_from_prefix(prefix: str) -> str:
    """Return the last ``/``-delimited segment of a storage prefix."""
    return (prefix or "").split("/")[-1]


class FileSyncService:
    """
    Service for attachment persistence.

    Batches fan out one task per file and wait for all of them.
    """

    def __init__(self, backend: IWhiteboardBackendPort, codec: IFileCodecPort):
        """
        Initialize file sync service.

        Args:
            backend: Port to the whiteboard backend
            codec: Decoder for downloaded attachments
        """
        self._backend = backend
        self._codec = codec

    async def save_files(
        self,
        prefix: str,
        files: Sequence[FileUpload],
    ) -> FileUploadResult:
        """
        Upload attachments concurrently.

        A file ID listed more than once is uploaded once, with its first buffer.

        Args:
            prefix: Storage prefix whose last segment is the room ID
            files: Files to upload

        Returns:
            Saved and errored file IDs
        """
        room_id = room_id_from_prefix(prefix)
        unique_files: Dict[str, FileUpload] = {}
        for file in files:
            unique_files.setdefault(file.id, file)

        async def upload_single(file: FileUpload) -> FileOutcome:
            try:
                await self._backend.upload_file(room_id, file.id, file.buffer)
                return FileOutcome(file_id=file.id)
            except Exception as e:
                logger.warning(
                    "File upload failed",
                    room_id=room_id,
                    file_id=file.id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return FileOutcome(file_id=file.id, error=e)

        outcomes = await asyncio.gather(*(upload_single(f) for f in unique_files.values()))
        result = FileUploadResult.from_outcomes(list(outcomes))

        logger.info(
            "File upload batch finished",
            room_id=room_id,
            saved=len(result.saved_files),
            errored=len(result.errored_files),
        )
        return result

    async def load_files(
        self,
        prefix: str,
        decryption_key: str,
        file_ids: Iterable[str],
    ) -> FileDownloadResult:
        """
        Download and decode attachments concurrently.

        Duplicate IDs are fetched once.

        Args:
            prefix: Storage prefix whose last segment is the room ID
            decryption_key: Key handed to the codec
            file_ids: IDs of the files to load

        Returns:
            Loaded files and errored file IDs
        """
        room_id = room_id_from_prefix(prefix)
        unique_ids: List[str] = list(dict.fromkeys(file_ids))

        async def download_single(file_id: str) -> FileOutcome:
            try:
                payload = await self._backend.download_file(room_id, file_id)
                file = await self._decode(file_id, payload, decryption_key)
                return FileOutcome(file_id=file_id, file=file)
            except Exception as e:
                logger.error(
                    "File download failed",
                    room_id=room_id,
                    file_id=file_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return FileOutcome(file_id=file_id, error=e)

        outcomes = await asyncio.gather(*(download_single(i) for i in unique_ids))
        result = FileDownloadResult.from_outcomes(list(outcomes))

        logger.info(
            "File download batch finished",
            room_id=room_id,
            loaded=len(result.loaded_files),
            errored=len(result.errored_files),
        )
        return result

    async def _decode(self, file_id: str, payload: bytes, decryption_key: str) -> BinaryFileData:
        try:
            decoded = await self._codec.decode(payload, decryption_key)
            data_url = decoded.data.decode("utf-8")
        except Exception as e:
            raise FileDecodeError(file_id, str(e)) from e

        metadata = decoded.metadata or {}
        return BinaryFileData(
            mime_type=metadata.get("mimeType") or DEFAULT_BINARY_MIME_TYPE,
            id=file_id,
            data_url=data_url,
            created=metadata.get("created") or _now_ms(),
        )
