"""
Typed inbound and outbound messages.

Inbound traffic is decoded into an ``InboundMessage`` whose ``kind`` selects
the payload variant. Outbound traffic is expressed as command dataclasses that
a codec turns into wire bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class MessageKind(Enum):
    """Discriminator for inbound messages."""
    HEARTBEAT = "heartbeat"
    CAMERA_INFORMATION = "camera_information"
    VIDEO_STREAM_INFORMATION = "video_stream_information"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Heartbeat:
    mav_type: int = 0
    autopilot: int = 0


@dataclass(frozen=True, slots=True)
class CameraInformation:
    camera_id: int
    model_name: str
    vendor_name: str = ""


@dataclass(frozen=True, slots=True)
class VideoStreamInformation:
    camera_id: int
    uri: str
    stream_id: int = 0


@dataclass(frozen=True, slots=True)
class OtherMessage:
    """Any message kind this package does not interpret."""
    name: str


Payload = Union[Heartbeat, CameraInformation, VideoStreamInformation, OtherMessage]


@dataclass(frozen=True, slots=True)
class InboundMessage:
    system_id: int
    component_id: int
    kind: MessageKind
    payload: Payload

    @classmethod
    def heartbeat(cls, system_id: int, component_id: int, mav_type: int = 0) -> "InboundMessage":
        return cls(system_id, component_id, MessageKind.HEARTBEAT, Heartbeat(mav_type=mav_type))

    @classmethod
    def camera_information(
        cls, system_id: int, component_id: int, camera_id: int, model_name: str, vendor_name: str = ""
    ) -> "InboundMessage":
        return cls(
            system_id,
            component_id,
            MessageKind.CAMERA_INFORMATION,
            CameraInformation(camera_id=camera_id, model_name=model_name, vendor_name=vendor_name),
        )

    @classmethod
    def video_stream_information(
        cls, system_id: int, component_id: int, camera_id: int, uri: str, stream_id: int = 0
    ) -> "InboundMessage":
        return cls(
            system_id,
            component_id,
            MessageKind.VIDEO_STREAM_INFORMATION,
            VideoStreamInformation(camera_id=camera_id, uri=uri, stream_id=stream_id),
        )

    @classmethod
    def other(cls, system_id: int, component_id: int, name: str) -> "InboundMessage":
        return cls(system_id, component_id, MessageKind.OTHER, OtherMessage(name=name))


# =============================================================================
# Outbound commands
# =============================================================================

@dataclass(frozen=True, slots=True)
class CommandLong:
    """A COMMAND_LONG addressed to one component."""
    target_system: int
    target_component: int
    command: int
    params: Tuple[float, float, float, float, float, float, float] = (0, 0, 0, 0, 0, 0, 0)
    confirmation: int = 0

    def __post_init__(self) -> None:
        if len(self.params) != 7:
            raise ValueError(f"COMMAND_LONG takes 7 params, got {len(self.params)}")


@dataclass(frozen=True, slots=True)
class SetVideoStreamSettings:
    """
    Request a new stream configuration from a camera.

    ``resolution_h`` is the horizontal resolution (frame width) and
    ``resolution_v`` the vertical resolution (frame height). Zero for both
    asks the camera for its default.
    """
    target_system: int
    target_component: int
    camera_id: int
    resolution_h: int
    resolution_v: int
    framerate: float = 0.0
    bitrate: int = 0
    rotation: int = 0
    uri: str = ""


OutboundCommand = Union[CommandLong, SetVideoStreamSettings]


__all__ = [
    "CameraInformation",
    "CommandLong",
    "Heartbeat",
    "InboundMessage",
    "MessageKind",
    "OtherMessage",
    "OutboundCommand",
    "Payload",
    "SetVideoStreamSettings",
    "VideoStreamInformation",
]
