"""
Unit tests for SceneSyncService.

Covers the version cache short-circuit, the didUpdate acceptance signal
and scene loading against a mocked HTTP backend.
"""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from whiteboard_sync.application.services import SceneSyncService
from whiteboard_sync.domain.errors import BackendConnectionError, BackendResponseError, InvalidSceneDocumentError
from whiteboard_sync.domain.ports import IWhiteboardBackendPort
from whiteboard_sync.domain.value_objects import CollabSession
from whiteboard_sync.infrastructure.persistence import SceneVersionCache


E1 = {"id": "e1", "type": "rectangle", "version": 1, "versionNonce": 1, "isDeleted": False}


@pytest.fixture
def session():
    return CollabSession(room_id="abc", room_key="secret", session_handle="socketA")


@pytest.fixture
def mock_backend():
    """Create a mock backend port."""
    backend = AsyncMock(spec=IWhiteboardBackendPort)
    backend.save_scene_document.return_value = {"didUpdate": True}
    return backend


class TestIsSaved:
    """Tests for SceneSyncService.is_saved."""

    def test_no_session_counts_as_saved(self, mock_backend, sample_elements):
        service = SceneSyncService(mock_backend)
        assert service.is_saved(None, sample_elements) is True

    @pytest.mark.parametrize(
        "session",
        [
            CollabSession(room_id=None, room_key="k", session_handle="s"),
            CollabSession(room_id="r", room_key=None, session_handle="s"),
            CollabSession(room_id="r", room_key="k", session_handle=None),
        ],
    )
    def test_incomplete_session_counts_as_saved(self, mock_backend, sample_elements, session):
        service = SceneSyncService(mock_backend)
        assert service.is_saved(session, sample_elements) is True

    def test_unknown_handle_is_not_saved(self, mock_backend, session, sample_elements):
        service = SceneSyncService(mock_backend)
        assert service.is_saved(session, sample_elements) is False

    def test_compares_against_cached_version(self, mock_backend, session, sample_elements):
        cache = SceneVersionCache()
        cache.set("socketA", 3)
        service = SceneSyncService(mock_backend, version_cache=cache)

        assert service.is_saved(session, sample_elements) is True
        assert service.is_saved(session, sample_elements + [E1]) is False

    def test_is_pure_read(self, mock_backend, session, sample_elements):
        service = SceneSyncService(mock_backend)
        service.is_saved(session, sample_elements)

        assert len(service.version_cache) == 0
        mock_backend.save_scene_document.assert_not_called()


class TestSaveScene:
    """Tests for SceneSyncService.save_scene."""

    @pytest.mark.asyncio
    async def test_no_room_short_circuits(self, mock_backend, sample_elements):
        service = SceneSyncService(mock_backend)

        assert await service.save_scene(None, sample_elements) is True
        assert await service.save_scene(CollabSession(), sample_elements) is True
        mock_backend.save_scene_document.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_then_resave_issues_one_write(self, make_client, session):
        """Test the scenario: first save posts, identical second save is skipped."""
        client, handler = make_client(lambda r: httpx.Response(200, json={"didUpdate": True}))
        service = SceneSyncService(client)

        async with client:
            assert await service.save_scene(session, [E1]) is True
            assert await service.save_scene(session, [E1]) is True

        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/whiteboard/abc"
        assert json.loads(request.content) == {"sceneVersion": 1, "data": [E1]}
        assert service.version_cache.get("socketA") == 1

    @pytest.mark.asyncio
    async def test_changed_scene_is_saved_again(self, mock_backend, session):
        service = SceneSyncService(mock_backend)

        await service.save_scene(session, [E1])
        await service.save_scene(session, [dict(E1, version=2)])

        assert mock_backend.save_scene_document.await_count == 2
        assert service.version_cache.get("socketA") == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [{"didUpdate": False}, {}, None, [], "ok"])
    async def test_unacknowledged_save_returns_false(self, mock_backend, session, response):
        mock_backend.save_scene_document.return_value = response
        service = SceneSyncService(mock_backend)

        assert await service.save_scene(session, [E1]) is False
        assert "socketA" not in service.version_cache

    @pytest.mark.asyncio
    async def test_unacknowledged_save_is_retried_by_next_call(self, mock_backend, session):
        mock_backend.save_scene_document.side_effect = [{"didUpdate": False}, {"didUpdate": True}]
        service = SceneSyncService(mock_backend)

        assert await service.save_scene(session, [E1]) is False
        assert await service.save_scene(session, [E1]) is True
        assert mock_backend.save_scene_document.await_count == 2

    @pytest.mark.asyncio
    async def test_sends_document_with_derived_version(self, mock_backend, session):
        service = SceneSyncService(mock_backend, get_version=lambda elements: 42)

        await service.save_scene(session, [E1])

        room_id, document = mock_backend.save_scene_document.await_args.args
        assert room_id == "abc"
        assert document.to_dict() == {"sceneVersion": 42, "data": [E1]}

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(self, make_client, session):
        def respond(request):
            raise httpx.ConnectError("down", request=request)

        client, _ = make_client(respond)
        service = SceneSyncService(client)

        async with client:
            with pytest.raises(BackendConnectionError):
                await service.save_scene(session, [E1])

        assert "socketA" not in service.version_cache

    @pytest.mark.asyncio
    async def test_non_json_response_propagates(self, make_client, session):
        client, _ = make_client(lambda r: httpx.Response(200, text="not json"))
        service = SceneSyncService(client)

        async with client:
            with pytest.raises(BackendResponseError):
                await service.save_scene(session, [E1])

    @pytest.mark.asyncio
    async def test_end_session_forgets_version(self, mock_backend, session):
        service = SceneSyncService(mock_backend)
        await service.save_scene(session, [E1])

        service.end_session("socketA")

        assert service.is_saved(session, [E1]) is False


class TestLoadScene:
    """Tests for SceneSyncService.load_scene."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"", b"null", b"false", b"0", b"\"\""])
    async def test_empty_body_returns_none(self, make_client, body):
        client, _ = make_client(lambda r: httpx.Response(200, content=body))
        service = SceneSyncService(client)

        async with client:
            assert await service.load_scene("abc", "secret") is None

    @pytest.mark.asyncio
    async def test_empty_scene_is_not_none(self, make_client):
        client, _ = make_client(lambda r: httpx.Response(200, json={"sceneVersion": 0, "data": []}))
        service = SceneSyncService(client)

        async with client:
            assert await service.load_scene("abc", "secret") == []

    @pytest.mark.asyncio
    async def test_restores_elements(self, mock_backend):
        mock_backend.load_scene_document.return_value = {
            "sceneVersion": 1,
            "data": [{"id": "e1", "type": "rectangle"}, {"broken": True}],
        }
        service = SceneSyncService(mock_backend)

        elements = await service.load_scene("abc", "secret")

        assert elements == [
            {"id": "e1", "type": "rectangle", "version": 1, "versionNonce": 0, "isDeleted": False}
        ]

    @pytest.mark.asyncio
    async def test_primes_version_cache(self, mock_backend, session, sample_elements):
        mock_backend.load_scene_document.return_value = {"sceneVersion": 3, "data": sample_elements}
        service = SceneSyncService(mock_backend)

        elements = await service.load_scene("abc", "secret", session_handle="socketA")

        assert service.version_cache.get("socketA") == 3
        # An unchanged scene right after load needs no save
        assert await service.save_scene(session, elements) is True
        mock_backend.save_scene_document.assert_not_called()

    @pytest.mark.asyncio
    async def test_without_handle_cache_untouched(self, mock_backend, sample_elements):
        mock_backend.load_scene_document.return_value = {"sceneVersion": 3, "data": sample_elements}
        service = SceneSyncService(mock_backend)

        await service.load_scene("abc", "secret")

        assert len(service.version_cache) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("document", [{"sceneVersion": 1}, {"data": "x"}, {}, [], [1, 2], 7, True])
    async def test_malformed_document_raises(self, mock_backend, document):
        mock_backend.load_scene_document.return_value = document
        service = SceneSyncService(mock_backend)

        with pytest.raises(InvalidSceneDocumentError):
            await service.load_scene("abc", "secret", session_handle="socketA")

        assert "socketA" not in service.version_cache

    @pytest.mark.asyncio
    async def test_custom_restore_is_used(self, mock_backend):
        mock_backend.load_scene_document.return_value = {"sceneVersion": 1, "data": [E1]}
        service = SceneSyncService(mock_backend, restore=lambda data: [{"restored": len(list(data))}])

        assert await service.load_scene("abc") == [{"restored": 1}]
