"""
Scene version cache.

Remembers, per collaboration session handle, the last scene version the
backend confirmed. Entries live until the owner calls ``discard`` when the
session ends.
"""

from typing import Dict, Optional

from whiteboard_sync.infrastructure.logging import get_logger


logger = get_logger(__name__)


class SceneVersionCache:
    """In-memory mapping of session handle to last saved scene version."""

    def __init__(self):
        self._versions: Dict[str, int] = {}

    def get(self, session_handle: str) -> Optional[int]:
        return self._versions.get(session_handle)

    def set(self, session_handle: str, scene_version: int) -> None:
        self._versions[session_handle] = scene_version
        logger.debug(
            "Scene version cached",
            session_handle=session_handle,
            scene_version=scene_version,
        )

    def discard(self, session_handle: str) -> None:
        """
        Forget a session handle.

        Must be called when the collaboration session ends.
        """
        if self._versions.pop(session_handle, None) is not None:
            logger.debug("Scene version evicted", session_handle=session_handle)

    def clear(self) -> None:
        self._versions.clear()

    def __contains__(self, session_handle: object) -> bool:
        return session_handle in self._versions

    def __len__(self) -> int:
        return len(self._versions)
