"""
Video Events

Change notifications published by the video manager. Listeners are called
synchronously, in subscription order, after a state change is committed.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List

from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)


class VideoEvent(Enum):
    STREAM_LIST_CHANGED = "stream_list_changed"
    SELECTED_STREAM_CHANGED = "selected_stream_changed"
    FRAME_SIZE_LIST_CHANGED = "frame_size_list_changed"
    CURRENT_URI_CHANGED = "current_uri_changed"
    CURRENT_FRAME_SIZE_CHANGED = "current_frame_size_changed"


VideoEventListener = Callable[[VideoEvent], None]


class EventEmitter:
    """Synchronous observer registry keyed by VideoEvent."""

    def __init__(self) -> None:
        self._listeners: Dict[VideoEvent, List[VideoEventListener]] = {
            event: [] for event in VideoEvent
        }

    def subscribe(self, event: VideoEvent, listener: VideoEventListener) -> None:
        listeners = self._listeners[event]
        if listener not in listeners:
            listeners.append(listener)

    def subscribe_all(self, listener: VideoEventListener) -> None:
        for event in VideoEvent:
            self.subscribe(event, listener)

    def unsubscribe(self, event: VideoEvent, listener: VideoEventListener) -> None:
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            pass

    def listener_count(self, event: VideoEvent) -> int:
        return len(self._listeners[event])

    def emit(self, event: VideoEvent) -> None:
        logger.debug("Emitting %s", event.value)
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners[event]):
            try:
                listener(event)
            except Exception as e:
                logger.error("Listener %r failed on %s: %s", listener, event.value, e)

    def clear(self) -> None:
        for listeners in self._listeners.values():
            listeners.clear()


__all__ = ["EventEmitter", "VideoEvent", "VideoEventListener"]
