"""
Inbound Message Router

Routes decoded messages from the tracked camera system to the registry and
stream controller. Messages from any other sender are dropped, as are
heartbeats, which belong to the discovery tracker.
"""

from __future__ import annotations

from typing import Optional

from .events import EventEmitter, VideoEvent
from .link import BaseLink
from .messages import CameraInformation, InboundMessage, MessageKind, VideoStreamInformation
from .protocols import NO_SELECTION
from .session import VideoSession
from .stream_controller import StreamController
from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)


class MessageRouter:

    def __init__(self, session: VideoSession, controller: StreamController, events: EventEmitter):
        self.session = session
        self.controller = controller
        self.events = events

    def on_message(self, link: Optional[BaseLink], message: InboundMessage) -> None:
        identity = self.session.identity
        if identity is None or not identity.matches(message.system_id):
            return

        match message.kind:
            case MessageKind.HEARTBEAT:
                return
            case MessageKind.CAMERA_INFORMATION:
                self._on_camera_information(message.payload)
            case MessageKind.VIDEO_STREAM_INFORMATION:
                self._on_video_stream_information(message.payload)
            case _:
                return

    def _on_camera_information(self, info: CameraInformation) -> None:
        logger.debug("Camera information: id=%d model=%s", info.camera_id, info.model_name)

        if self.session.registry.add(info.camera_id, info.model_name) is None:
            return

        if self.session.selected_stream == NO_SELECTION:
            self.controller.select_stream(0)

        self.events.emit(VideoEvent.STREAM_LIST_CHANGED)

    def _on_video_stream_information(self, info: VideoStreamInformation) -> None:
        if not self.session.registry.update_uri(info.camera_id, info.uri):
            logger.warning("Stream information for unknown camera %d, camera removed?", info.camera_id)
            return

        logger.info("Camera %d stream uri: %s", info.camera_id, info.uri)
        self.events.emit(VideoEvent.CURRENT_URI_CHANGED)


__all__ = ["MessageRouter"]
