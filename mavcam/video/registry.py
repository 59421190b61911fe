"""
Camera Registry

Ordered, append-only collection of the streams discovered during a session.
Entries are keyed by the camera id reported by the camera firmware; a second
announcement for a known camera id leaves the registry untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Tuple

from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)


@dataclass(slots=True)
class Stream:
    """A discovered video source."""

    camera_id: int
    name: str
    uri: str = ""

    def snapshot(self) -> "Stream":
        return replace(self)


@dataclass(frozen=True, slots=True)
class FrameSize:
    """A named resolution option; (0, 0) means camera default."""

    name: str
    width: int
    height: int

    @property
    def is_default(self) -> bool:
        return self.width == 0 and self.height == 0


@dataclass
class CameraRegistry:
    """Append-only stream list with a camera id index."""

    _streams: List[Stream] = field(default_factory=list)
    _by_camera_id: Dict[int, Stream] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._streams)

    def __iter__(self) -> Iterator[Stream]:
        return iter(self._streams)

    def __contains__(self, camera_id: object) -> bool:
        return camera_id in self._by_camera_id

    def find(self, camera_id: int) -> Optional[Stream]:
        return self._by_camera_id.get(camera_id)

    def get(self, index: int) -> Optional[Stream]:
        """Return the stream at ``index`` or None when out of bounds."""
        if 0 <= index < len(self._streams):
            return self._streams[index]
        return None

    def add(self, camera_id: int, name: str) -> Optional[Stream]:
        """
        Register a camera.

        Returns:
            The new Stream, or None if the camera id was already registered
        """
        if camera_id in self._by_camera_id:
            logger.debug("Camera %d already registered, ignoring announcement", camera_id)
            return None

        stream = Stream(camera_id=camera_id, name=name)
        self._streams.append(stream)
        self._by_camera_id[camera_id] = stream
        logger.info("Registered camera %d (%s) at index %d", camera_id, name, len(self._streams) - 1)
        return stream

    def update_uri(self, camera_id: int, uri: str) -> bool:
        """Overwrite the uri of a known camera; False if the camera is unknown."""
        stream = self._by_camera_id.get(camera_id)
        if stream is None:
            return False
        stream.uri = uri
        return True

    def snapshot(self) -> Tuple[Stream, ...]:
        """Read-only copies in registration order."""
        return tuple(stream.snapshot() for stream in self._streams)

    def clear(self) -> None:
        self._streams.clear()
        self._by_camera_id.clear()


__all__ = ["CameraRegistry", "FrameSize", "Stream"]
