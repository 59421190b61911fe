"""
MAVLink Video Manager

Facade over camera discovery, the stream registry and stream control. The
embedding application feeds it heartbeats and decoded messages (or raw bytes
through ``handle_bytes``), reads its state, and subscribes to change events.

Usage:
    manager = MAVLinkVideoManager(codec=PymavlinkCodec())
    manager.subscribe(VideoEvent.CURRENT_URI_CHANGED, on_uri_changed)

    # From the link layer
    manager.on_heartbeat(link, system_id=7)
    manager.on_message(link, message)

    # From the operator
    manager.select_stream(0)
    manager.select_frame_size(2)
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .codec import MessageCodec
from .commands import CommandSender
from .config import VideoConfig
from .discovery import DiscoveryTracker
from .events import EventEmitter, VideoEvent, VideoEventListener
from .link import BaseLink
from .messages import InboundMessage, MessageKind
from .protocols import MAV_TYPE_CAMERA
from .registry import FrameSize, Stream
from .router import MessageRouter
from .session import CameraIdentity, VideoSession
from .stream_controller import StreamController
from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)


class MAVLinkVideoManager:

    def __init__(
        self,
        codec: MessageCodec,
        config: Optional[VideoConfig] = None,
        frame_sizes: Optional[Sequence[FrameSize]] = None,
    ):
        """
        Args:
            codec: Wire codec used to encode commands and decode raw bytes
            config: Addressing and error handling settings
            frame_sizes: Resolution catalog; a default (0x0) entry is
                prepended if the first entry is not one
        """
        self.config = config or VideoConfig()
        self.codec = codec

        self._session = VideoSession.with_frame_sizes(frame_sizes)
        self._events = EventEmitter()
        self._sender = CommandSender(self._session, codec, self.config)
        self._discovery = DiscoveryTracker(self._session, self._sender)
        self._controller = StreamController(self._session, self._sender, self._events)
        self._router = MessageRouter(self._session, self._controller, self._events)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def stream_list(self) -> Tuple[Stream, ...]:
        """Copies of the discovered streams in discovery order."""
        return self._session.registry.snapshot()

    @property
    def selected_stream(self) -> int:
        return self._controller.selected_stream

    @property
    def frame_size_list(self) -> Tuple[FrameSize, ...]:
        return self._session.frame_sizes

    @property
    def current_frame_size(self) -> int:
        return self._controller.current_frame_size

    @property
    def current_uri(self) -> str:
        return self._controller.video_uri()

    def get_video_uri(self) -> str:
        return self._controller.video_uri()

    @property
    def camera_identity(self) -> Optional[CameraIdentity]:
        return self._session.identity

    @property
    def active_link(self) -> Optional[BaseLink]:
        return self._session.active_link

    # =========================================================================
    # Mutators
    # =========================================================================

    def select_stream(self, index: int) -> None:
        self._controller.select_stream(index)

    def select_frame_size(self, index: int) -> None:
        self._controller.select_frame_size(index)

    def reset_session(self) -> None:
        self._controller.reset_session()

    def refresh_video_provider(self) -> bool:
        """Ask the tracked camera system to announce its cameras again."""
        return self._discovery.refresh()

    # =========================================================================
    # Notifications
    # =========================================================================

    def subscribe(self, event: VideoEvent, listener: VideoEventListener) -> None:
        self._events.subscribe(event, listener)

    def subscribe_all(self, listener: VideoEventListener) -> None:
        self._events.subscribe_all(listener)

    def unsubscribe(self, event: VideoEvent, listener: VideoEventListener) -> None:
        self._events.unsubscribe(event, listener)

    # =========================================================================
    # Inbound traffic
    # =========================================================================

    def on_heartbeat(self, link: Optional[BaseLink], system_id: int, component_id: int = 0) -> None:
        self._discovery.on_heartbeat(link, system_id, component_id)

    def on_message(self, link: Optional[BaseLink], message: InboundMessage) -> None:
        self._router.on_message(link, message)

    def handle_message(self, link: Optional[BaseLink], message: InboundMessage) -> None:
        """
        Dispatch one decoded message to discovery or the router.

        Only heartbeats that announce a camera (MAV_TYPE_CAMERA) start
        discovery; heartbeats from ground stations, autopilots and other
        peers sharing the link are dropped here.
        """
        if message.kind is MessageKind.HEARTBEAT:
            if message.payload.mav_type != MAV_TYPE_CAMERA:
                logger.debug("Ignoring heartbeat from %d/%d (type %d)",
                             message.system_id, message.component_id, message.payload.mav_type)
                return
            self.on_heartbeat(link, message.system_id, message.component_id)
        else:
            self.on_message(link, message)

    def handle_bytes(self, link: Optional[BaseLink], data: bytes) -> int:
        """
        Decode raw bytes received on ``link`` and dispatch every message.

        Returns:
            Number of messages decoded
        """
        try:
            messages = self.codec.decode(data)
        except Exception as e:
            logger.error("Failed to decode %d bytes from %s: %s",
                         len(data), link.name if link else "unknown link", e)
            return 0

        for message in messages:
            self.handle_message(link, message)
        return len(messages)


__all__ = ["MAVLinkVideoManager"]
