"""
HTTP Infrastructure

HTTP client adapters for the whiteboard backend.
"""

from .whiteboard_client import WhiteboardClient, get_whiteboard_client

__all__ = ["WhiteboardClient", "get_whiteboard_client"]
