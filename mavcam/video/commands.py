"""
Command Sender

Builds the camera commands used during discovery and stream control and
pushes them through the session's active link. Sending is fire and forget:
there is no acknowledgement, timeout or retry. A command that cannot be sent
is dropped and reported through the return value and a warning.
"""

from __future__ import annotations

from .codec import MessageCodec
from .config import VideoConfig
from .messages import CommandLong, OutboundCommand, SetVideoStreamSettings
from .protocols import (
    MAV_CMD_REQUEST_CAMERA_INFORMATION,
    MAV_CMD_REQUEST_VIDEO_STREAM_INFORMATION,
)
from .registry import FrameSize
from .session import VideoSession
from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)


class CommandSender:

    def __init__(self, session: VideoSession, codec: MessageCodec, config: VideoConfig):
        self.session = session
        self.codec = codec
        self.config = config

    # =========================================================================
    # Command builders
    # =========================================================================

    def camera_information_request(self, system_id: int) -> CommandLong:
        return CommandLong(
            target_system=system_id,
            target_component=self.config.camera_component_id,
            command=MAV_CMD_REQUEST_CAMERA_INFORMATION,
            params=(self.config.request_all_cameras, 0, 0, 0, 0, 0, 0),
        )

    def video_stream_information_request(self, system_id: int, camera_id: int) -> CommandLong:
        return CommandLong(
            target_system=system_id,
            target_component=self.config.camera_component_id,
            command=MAV_CMD_REQUEST_VIDEO_STREAM_INFORMATION,
            params=(camera_id, self.config.stream_id, 0, 0, 0, 0, 0),
        )

    def video_stream_settings(
        self, system_id: int, camera_id: int, frame_size: FrameSize
    ) -> SetVideoStreamSettings:
        # resolution_h is the horizontal size (width), resolution_v the vertical (height)
        return SetVideoStreamSettings(
            target_system=system_id,
            target_component=self.config.camera_component_id,
            camera_id=camera_id,
            resolution_h=frame_size.width,
            resolution_v=frame_size.height,
        )

    # =========================================================================
    # Sending
    # =========================================================================

    def send(self, command: OutboundCommand) -> bool:
        """
        Encode and transmit a command on the active link.

        Returns:
            True if the bytes were handed to the link
        """
        link = self.session.active_link
        if link is None:
            logger.warning("No active link, dropping %s", type(command).__name__)
            return False
        if not link.is_connected:
            logger.warning("Link %s is not connected, dropping %s", link.name, type(command).__name__)
            return False

        data = self.codec.encode(command)
        if not data:
            logger.warning("Codec cannot encode %r, dropping", command)
            return False

        link.write_bytes(data)
        logger.debug("Sent %r on %s (%d bytes)", command, link.name, len(data))
        return True

    def request_camera_information(self, system_id: int) -> bool:
        return self.send(self.camera_information_request(system_id))

    def request_video_stream_information(self, system_id: int, camera_id: int) -> bool:
        return self.send(self.video_stream_information_request(system_id, camera_id))

    def set_video_stream_settings(self, system_id: int, camera_id: int, frame_size: FrameSize) -> bool:
        return self.send(self.video_stream_settings(system_id, camera_id, frame_size))


__all__ = ["CommandSender"]
