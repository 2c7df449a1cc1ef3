"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Callable, Dict, List

import httpx
import pytest

# Add src to path for imports when the package is not installed
_src_path = Path(__file__).resolve().parent.parent / "src"
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from whiteboard_sync.domain.ports import IFileCodecPort
from whiteboard_sync.domain.value_objects import DecodedFile
from whiteboard_sync.infrastructure.http import WhiteboardClient


BASE_URL = "http://whiteboard.test/api/whiteboard"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "contract: HTTP contract tests")


class FakeCodec(IFileCodecPort):
    """Codec that treats stored bytes as the plain data URL."""

    def __init__(self, metadata: Dict = None):
        self.metadata = metadata if metadata is not None else {"mimeType": "image/png", "created": 1700000000000}
        self.calls: List[tuple] = []

    async def decode(self, data: bytes, decryption_key: str) -> DecodedFile:
        self.calls.append((data, decryption_key))
        if data == b"corrupt":
            raise ValueError("bad payload")
        return DecodedFile(data=data, metadata=dict(self.metadata))


class RecordingHandler:
    """httpx.MockTransport handler that records every request."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)


@pytest.fixture
def fake_codec() -> FakeCodec:
    return FakeCodec()


@pytest.fixture
def make_client():
    """Build a WhiteboardClient backed by a recording mock transport."""

    def _make(respond: Callable[[httpx.Request], httpx.Response]):
        handler = RecordingHandler(respond)
        client = WhiteboardClient(
            base_url=BASE_URL,
            transport=httpx.MockTransport(handler),
        )
        return client, handler

    return _make


@pytest.fixture
def sample_elements() -> List[dict]:
    """Two-element scene with scene version 3."""
    return [
        {"id": "e1", "type": "rectangle", "version": 1, "versionNonce": 11, "isDeleted": False},
        {"id": "e2", "type": "ellipse", "version": 2, "versionNonce": 22, "isDeleted": False},
    ]
