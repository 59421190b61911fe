"""
Stream Controller

Owns the selected stream and selected frame size. Selection changes are
turned into camera requests; the resulting stream information arrives later
through the router.
"""

from __future__ import annotations

from .commands import CommandSender
from .events import EventEmitter, VideoEvent
from .protocols import NO_SELECTION
from .session import VideoSession
from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)


class StreamController:

    def __init__(self, session: VideoSession, sender: CommandSender, events: EventEmitter):
        self.session = session
        self.sender = sender
        self.events = events

    @property
    def selected_stream(self) -> int:
        return self.session.selected_stream

    @property
    def current_frame_size(self) -> int:
        return self.session.current_frame_size

    def video_uri(self) -> str:
        """Uri of the selected stream, or "" when nothing valid is selected."""
        stream = self.session.selected
        return stream.uri if stream is not None else ""

    def select_stream(self, index: int) -> None:
        """
        Select the stream at ``index``.

        Out-of-range indices (including negative ones) clear the selection.
        A valid selection resets the frame size to the camera default and
        requests fresh stream information for that camera.
        """
        stream = self.session.registry.get(index)

        if stream is None:
            if index != NO_SELECTION:
                logger.debug("Stream index %d out of range (%d streams), clearing selection",
                             index, len(self.session.registry))
            self.session.selected_stream = NO_SELECTION
            self.events.emit(VideoEvent.SELECTED_STREAM_CHANGED)
            self.events.emit(VideoEvent.CURRENT_URI_CHANGED)
            return

        self.session.selected_stream = index
        self.session.current_frame_size = 0
        logger.info("Selected stream %d (camera %d, %s)", index, stream.camera_id, stream.name)

        self._request_stream_information(stream.camera_id)

        self.events.emit(VideoEvent.SELECTED_STREAM_CHANGED)
        self.events.emit(VideoEvent.CURRENT_FRAME_SIZE_CHANGED)
        self.events.emit(VideoEvent.CURRENT_URI_CHANGED)

    def select_frame_size(self, index: int) -> None:
        """
        Ask the selected camera to stream at the frame size at ``index``.

        Ignored when no stream is selected or ``index`` is outside the catalog.
        """
        stream = self.session.selected
        if stream is None:
            logger.debug("No stream selected, ignoring frame size %d", index)
            return

        frame_size = self.session.frame_size(index)
        if frame_size is None:
            logger.debug("Frame size index %d out of range, ignoring", index)
            return

        identity = self.session.identity
        if identity is None or not self.sender.set_video_stream_settings(
            identity.system_id, stream.camera_id, frame_size
        ):
            # local selection is kept; the camera stays at its current size
            logger.warning("Frame size %s not sent to camera %d", frame_size.name, stream.camera_id)
        self._request_stream_information(stream.camera_id)

        self.session.current_frame_size = index
        logger.info("Frame size for camera %d set to %s", stream.camera_id, frame_size.name)
        self.events.emit(VideoEvent.CURRENT_FRAME_SIZE_CHANGED)

    def reset_session(self) -> None:
        """Forget the camera, its link, all streams and both selections."""
        self.session.reset()
        logger.info("Video session reset")
        self.events.emit(VideoEvent.CURRENT_URI_CHANGED)
        self.events.emit(VideoEvent.CURRENT_FRAME_SIZE_CHANGED)
        self.events.emit(VideoEvent.STREAM_LIST_CHANGED)

    def _request_stream_information(self, camera_id: int) -> bool:
        identity = self.session.identity
        if identity is None:
            logger.warning("No camera identity, cannot request stream information for camera %d", camera_id)
            return False
        return self.sender.request_video_stream_information(identity.system_id, camera_id)


__all__ = ["StreamController"]
