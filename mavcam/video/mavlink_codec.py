"""
pymavlink Codec

``MessageCodec`` implementation backed by pymavlink's generated dialects.
Install with the ``mavlink`` extra: ``pip install mavcam[mavlink]``.

Camera ids: dialects that still carry a ``camera_id`` field in
CAMERA_INFORMATION / VIDEO_STREAM_INFORMATION use it; otherwise the sender
component id identifies the camera, as in current MAVLink.

Frame sizes: SET_VIDEO_STREAM_SETTINGS was removed from the ``common``
dialect, so with the default dialect frame-size changes never reach the
camera (the command is dropped with a warning). Pass a generated dialect
module that still defines the message when the camera honours it.
"""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Any, List, Optional, Union

from .messages import CommandLong, InboundMessage, OutboundCommand, SetVideoStreamSettings
from .protocols import (
    GCS_SYSTEM_ID,
    MAV_COMP_ID_ALL,
    MSG_CAMERA_INFORMATION,
    MSG_HEARTBEAT,
    MSG_VIDEO_STREAM_INFORMATION,
)
from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)

DEFAULT_DIALECT = "common"


def load_dialect(name: str = DEFAULT_DIALECT, mavlink2: bool = True) -> ModuleType:
    """Import a generated pymavlink dialect, e.g. ``common`` or ``ardupilotmega``."""
    package = "pymavlink.dialects.v20" if mavlink2 else "pymavlink.dialects.v10"
    return importlib.import_module(f"{package}.{name}")


def _text(value: Any) -> str:
    """Decode a fixed-size char/uint8 array field into a clean string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.split("\x00", 1)[0]
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        raw = bytes(int(b) & 0xFF for b in value)
    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


class PymavlinkCodec:
    """Encodes camera commands and decodes camera messages with pymavlink."""

    def __init__(
        self,
        dialect: Union[str, ModuleType] = DEFAULT_DIALECT,
        system_id: int = GCS_SYSTEM_ID,
        component_id: int = MAV_COMP_ID_ALL,
    ):
        self.dialect = load_dialect(dialect) if isinstance(dialect, str) else dialect
        self._mav = self.dialect.MAVLink(None, srcSystem=system_id, srcComponent=component_id)
        # Corrupt frames come back as BAD_DATA messages instead of raising
        self._mav.robust_parsing = True

    @classmethod
    def from_config(cls, config, dialect: Union[str, ModuleType] = DEFAULT_DIALECT) -> "PymavlinkCodec":
        return cls(dialect, system_id=config.gcs_system_id, component_id=config.gcs_component_id)

    # =========================================================================
    # Encoding
    # =========================================================================

    def encode(self, command: OutboundCommand) -> Optional[bytes]:
        if isinstance(command, CommandLong):
            msg = self._mav.command_long_encode(
                command.target_system,
                command.target_component,
                command.command,
                command.confirmation,
                *[float(p) for p in command.params],
            )
        elif isinstance(command, SetVideoStreamSettings):
            encoder = getattr(self._mav, "set_video_stream_settings_encode", None)
            if encoder is None:
                logger.warning("Dialect %s has no SET_VIDEO_STREAM_SETTINGS", self.dialect.__name__)
                return None
            msg = encoder(
                target_system=command.target_system,
                target_component=command.target_component,
                camera_id=command.camera_id,
                framerate=command.framerate,
                resolution_h=command.resolution_h,
                resolution_v=command.resolution_v,
                bitrate=command.bitrate,
                rotation=command.rotation,
                uri=command.uri.encode("utf-8"),
            )
        else:
            logger.warning("Unsupported command type %s", type(command).__name__)
            return None

        return bytes(msg.pack(self._mav))

    # =========================================================================
    # Decoding
    # =========================================================================

    def decode(self, data: bytes) -> List[InboundMessage]:
        parsed = self._mav.parse_buffer(data) or []
        messages = []
        for msg in parsed:
            message = self.to_inbound(msg)
            if message is not None:
                messages.append(message)
        return messages

    @staticmethod
    def to_inbound(msg: Any) -> Optional[InboundMessage]:
        """Convert a pymavlink message into an InboundMessage."""
        msg_type = msg.get_type()
        if msg_type == "BAD_DATA":
            logger.debug("Discarding corrupt frame")
            return None

        system_id = msg.get_srcSystem()
        component_id = msg.get_srcComponent()

        if msg_type == MSG_HEARTBEAT:
            return InboundMessage.heartbeat(system_id, component_id, mav_type=msg.type)

        if msg_type == MSG_CAMERA_INFORMATION:
            camera_id = getattr(msg, "camera_id", None)
            return InboundMessage.camera_information(
                system_id,
                component_id,
                camera_id=component_id if camera_id is None else camera_id,
                model_name=_text(msg.model_name),
                vendor_name=_text(getattr(msg, "vendor_name", "")),
            )

        if msg_type == MSG_VIDEO_STREAM_INFORMATION:
            camera_id = getattr(msg, "camera_id", None)
            return InboundMessage.video_stream_information(
                system_id,
                component_id,
                camera_id=component_id if camera_id is None else camera_id,
                uri=_text(msg.uri),
                stream_id=getattr(msg, "stream_id", 0),
            )

        return InboundMessage.other(system_id, component_id, msg_type)


__all__ = ["PymavlinkCodec", "load_dialect"]
