"""
File Codec Port Interface

Defines the contract for decoding stored attachments.
Implemented outside this package (decompression and decryption).
"""

from abc import ABC, abstractmethod

from whiteboard_sync.domain.value_objects import DecodedFile


class IFileCodecPort(ABC):
    """Port interface for the attachment codec."""

    @abstractmethod
    async def decode(self, data: bytes, decryption_key: str) -> DecodedFile:
        """
        Decompress and decrypt a stored attachment.

        Args:
            data: Raw bytes as stored on the backend
            decryption_key: Room key used to decrypt

        Returns:
            Decoded payload and its metadata
        """
        pass
