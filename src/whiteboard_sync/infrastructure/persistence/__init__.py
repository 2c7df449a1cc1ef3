"""
Persistence Infrastructure

In-memory state kept for the lifetime of collaboration sessions.
"""

from .version_cache import SceneVersionCache

__all__ = ["SceneVersionCache"]
