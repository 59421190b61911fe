"""
Video Session State

Everything learned during one discovery cycle: the camera identity, the link
it was seen on, the stream registry and the operator's selections. A reset
returns the session to its initial state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .link import BaseLink
from .protocols import DEFAULT_FRAME_SIZES, NO_SELECTION
from .registry import CameraRegistry, FrameSize, Stream


@dataclass(frozen=True, slots=True)
class CameraIdentity:
    """The camera-bearing peer tracked by the session."""

    system_id: int
    component_id: int = 0

    def matches(self, system_id: int) -> bool:
        return self.system_id == system_id


@dataclass
class VideoSession:
    frame_sizes: Tuple[FrameSize, ...] = DEFAULT_FRAME_SIZES
    identity: Optional[CameraIdentity] = None
    active_link: Optional[BaseLink] = None
    registry: CameraRegistry = field(default_factory=CameraRegistry)
    selected_stream: int = NO_SELECTION
    current_frame_size: int = 0

    @classmethod
    def with_frame_sizes(cls, frame_sizes: Optional[Sequence[FrameSize]]) -> "VideoSession":
        if not frame_sizes:
            return cls()
        # exactly one default entry, always at index 0
        defaults = [fs for fs in frame_sizes if fs.is_default]
        others = tuple(fs for fs in frame_sizes if not fs.is_default)
        head = defaults[0] if defaults else DEFAULT_FRAME_SIZES[0]
        return cls(frame_sizes=(head,) + others)

    @property
    def selected(self) -> Optional[Stream]:
        """The selected stream, re-validated against the registry."""
        if self.selected_stream == NO_SELECTION:
            return None
        return self.registry.get(self.selected_stream)

    @property
    def has_selection(self) -> bool:
        return self.selected is not None

    def frame_size(self, index: int) -> Optional[FrameSize]:
        if 0 <= index < len(self.frame_sizes):
            return self.frame_sizes[index]
        return None

    def set_active_link(self, link: Optional[BaseLink]) -> None:
        """Make ``link`` the single preferred path for camera traffic."""
        previous = self.active_link
        if previous is not None and previous is not link:
            previous.set_preferred(False)
        self.active_link = link
        if link is not None:
            link.set_preferred(True)

    def reset(self) -> None:
        self.identity = None
        self.set_active_link(None)
        self.registry.clear()
        self.selected_stream = NO_SELECTION
        self.current_frame_size = 0


__all__ = ["CameraIdentity", "VideoSession"]
