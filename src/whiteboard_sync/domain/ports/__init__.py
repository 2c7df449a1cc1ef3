"""
Domain Ports

Port interfaces defining contracts between layers.
All dependencies on external systems are abstracted through ports.
"""

from .backend_port import IWhiteboardBackendPort
from .codec_port import IFileCodecPort

__all__ = [
    "IWhiteboardBackendPort",
    "IFileCodecPort",
]
