"""
Infrastructure Layer

Provides technical implementations for external concerns.
"""

from .http import WhiteboardClient, get_whiteboard_client
from .persistence import SceneVersionCache

__all__ = ["WhiteboardClient", "get_whiteboard_client", "SceneVersionCache"]
