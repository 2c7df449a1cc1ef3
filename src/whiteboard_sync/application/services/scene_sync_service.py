"""
Scene Sync Service

Saves and loads a room's scene document and tracks, per collaboration
session, whether the current scene is already stored on the backend.
"""

from typing import List, Optional, Sequence

from whiteboard_sync.domain.errors import InvalidSceneDocumentError
from whiteboard_sync.domain.ports import IWhiteboardBackendPort
from whiteboard_sync.domain.scene import (
    RestoreElementsFn,
    SceneVersionFn,
    get_scene_version,
    restore_elements,
)
from whiteboard_sync.domain.value_objects import CollabSession, Element, SceneDocument
from whiteboard_sync.infrastructure.logging import get_logger
from whiteboard_sync.infrastructure.persistence import SceneVersionCache


logger = get_logger(__name__)


class SceneSyncService:
    """
    Service for scene persistence.

    Saves are skipped when the version cache shows the backend already holds
    the current scene version for the session.
    """

    def __init__(
        self,
        backend: IWhiteboardBackendPort,
        version_cache: Optional[SceneVersionCache] = None,
        get_version: SceneVersionFn = get_scene_version,
        restore: RestoreElementsFn = restore_elements,
    ):
        """
        Initialize scene sync service.

        Args:
            backend: Port to the whiteboard backend
            version_cache: Cache of last saved versions per session handle
            get_version: Scene version derivation
            restore: Element restoration applied to loaded scenes
        """
        self._backend = backend
        self._version_cache = version_cache if version_cache is not None else SceneVersionCache()
        self._get_version = get_version
        self._restore = restore

    @property
    def version_cache(self) -> SceneVersionCache:
        return self._version_cache

    def is_saved(
        self,
        session: Optional[CollabSession],
        elements: Sequence[Element],
    ) -> bool:
        """
        Check whether the backend already holds this scene for the session.

        Without a connected session there is nothing to sync with, so the
        scene counts as saved and never blocks the caller.

        Args:
            session: Collaboration session, may be None
            elements: Current scene elements

        Returns:
            True if saved (or nothing to save to), False otherwise
        """
        if session is None or not session.is_connected:
            return True

        scene_version = self._get_version(elements)
        return self._version_cache.get(session.session_handle) == scene_version

    async def save_scene(
        self,
        session: Optional[CollabSession],
        elements: Sequence[Element],
    ) -> bool:
        """
        Make the room's remote scene match ``elements``.

        Args:
            session: Collaboration session, may be None
            elements: Current scene elements

        Returns:
            True if already saved or the backend confirmed the update

        Raises:
            BackendError: On transport failure or unparseable response
        """
        if session is None or not session.is_connected or self.is_saved(session, elements):
            logger.debug(
                "Scene save skipped",
                room_id=session.room_id if session else None,
            )
            return True

        scene_version = self._get_version(elements)
        document = SceneDocument(scene_version=scene_version, elements=list(elements))

        response = await self._backend.save_scene_document(session.room_id, document)
        did_update = bool(isinstance(response, dict) and response.get("didUpdate"))

        if did_update:
            self._version_cache.set(session.session_handle, scene_version)
            logger.info(
                "Scene saved",
                room_id=session.room_id,
                scene_version=scene_version,
            )
        else:
            logger.warning(
                "Scene save not acknowledged",
                room_id=session.room_id,
                scene_version=scene_version,
            )

        return did_update

    async def load_scene(
        self,
        room_id: str,
        room_key: Optional[str] = None,
        session_handle: Optional[str] = None,
    ) -> Optional[List[Element]]:
        """
        Load and restore a room's scene.

        Args:
            room_id: Room identifier
            room_key: Room key; scene documents are stored as sent and need no key here
            session_handle: If given, primed in the version cache with the loaded version

        Returns:
            Restored elements, or None if the room has no document

        Raises:
            BackendError: On transport failure or unparseable response
            InvalidSceneDocumentError: If the document has no element list
        """
        document = await self._backend.load_scene_document(room_id)
        # null, false, 0 and "" mean no document; empty containers are malformed
        if not document and not isinstance(document, (dict, list)):
            logger.debug("No scene document found", room_id=room_id)
            return None

        if not isinstance(document, dict) or not isinstance(document.get("data"), list):
            raise InvalidSceneDocumentError(
                room_id,
                "missing element list",
            )

        data = document["data"]
        if session_handle:
            self._version_cache.set(session_handle, self._get_version(data))

        elements = self._restore(data)
        logger.info(
            "Scene loaded",
            room_id=room_id,
            element_count=len(elements),
        )
        return elements

    def end_session(self, session_handle: str) -> None:
        """
        Drop cached state for a collaboration session that has ended.

        Args:
            session_handle: Handle of the ended session
        """
        self._version_cache.discard(session_handle)
