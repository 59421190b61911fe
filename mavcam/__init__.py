"""MAVLink camera discovery and video-stream control."""

from __future__ import annotations

from importlib import metadata

from .video import (
    FrameSize,
    MAVLinkVideoManager,
    Stream,
    VideoConfig,
    VideoEvent,
)

try:
    __version__ = metadata.version("mavcam")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


__all__ = [
    "__version__",
    "FrameSize",
    "MAVLinkVideoManager",
    "Stream",
    "VideoConfig",
    "VideoEvent",
]
