"""
Whiteboard Value Objects

Immutable value objects for scene and attachment persistence.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional


Element = Mapping[str, Any]

DEFAULT_BINARY_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class CollabSession:
    """
    Live collaboration session as seen by the persistence layer.

    Attributes:
        room_id: Server-side room identifier
        room_key: Room encryption key
        session_handle: Opaque identifier of the live connection, used as cache key
    """

    room_id: Optional[str] = None
    room_key: Optional[str] = None
    session_handle: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        """True when the session has a room, a key and a live handle."""
        return bool(self.room_id and self.room_key and self.session_handle)


@dataclass(frozen=True)
class SceneDocument:
    """
    Remote representation of a room's scene.

    Attributes:
        scene_version: Version token derived from the elements
        elements: Full element list
    """

    scene_version: int
    elements: List[Element]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire payload."""
        return {
            "sceneVersion": self.scene_version,
            "data": list(self.elements),
        }


@dataclass(frozen=True)
class FileUpload:
    """A binary attachment waiting to be uploaded."""

    id: str
    buffer: bytes


@dataclass(frozen=True)
class DecodedFile:
    """
    Output of the attachment codec.

    Attributes:
        data: Decompressed and decrypted payload
        metadata: Codec metadata, may carry ``mimeType`` and ``created``
    """

    data: bytes
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BinaryFileData:
    """
    A loaded attachment ready to be handed to the scene.

    Attributes:
        mime_type: MIME type of the file
        id: File identifier
        data_url: File content as a data URL
        created: Creation time in milliseconds since the epoch
    """

    mime_type: str
    id: str
    data_url: str
    created: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "mimeType": self.mime_type,
            "id": self.id,
            "dataURL": self.data_url,
            "created": self.created,
        }


@dataclass(frozen=True)
class FileOutcome:
    """Result of a single file transfer inside a batch."""

    file_id: str
    file: Optional[BinaryFileData] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FileUploadResult:
    """Partition of uploaded file IDs into saved and errored."""

    saved_files: FrozenSet[str] = frozenset()
    errored_files: FrozenSet[str] = frozenset()

    @classmethod
    def from_outcomes(cls, outcomes: List[FileOutcome]) -> "FileUploadResult":
        return cls(
            saved_files=frozenset(o.file_id for o in outcomes if o.ok),
            errored_files=frozenset(o.file_id for o in outcomes if not o.ok),
        )


@dataclass(frozen=True)
class FileDownloadResult:
    """Loaded attachments plus the IDs that could not be loaded."""

    loaded_files: List[BinaryFileData] = field(default_factory=list)
    errored_files: FrozenSet[str] = frozenset()

    @classmethod
    def from_outcomes(cls, outcomes: List[FileOutcome]) -> "FileDownloadResult":
        return cls(
            loaded_files=[o.file for o in outcomes if o.ok and o.file is not None],
            errored_files=frozenset(o.file_id for o in outcomes if not o.ok),
        )
