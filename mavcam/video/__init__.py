from .codec import MessageCodec
from .config import VideoConfig
from .events import EventEmitter, VideoEvent
from .link import BaseLink
from .link_reader import LinkReader
from .manager import MAVLinkVideoManager
from .messages import (
    CameraInformation,
    CommandLong,
    InboundMessage,
    MessageKind,
    SetVideoStreamSettings,
    VideoStreamInformation,
)
from .protocols import DEFAULT_FRAME_SIZES, NO_SELECTION
from .registry import CameraRegistry, FrameSize, Stream
from .session import CameraIdentity, VideoSession

# PymavlinkCodec lives in .mavlink_codec and needs the "mavlink" extra

__all__ = [
    'MessageCodec',
    'VideoConfig',
    'EventEmitter',
    'VideoEvent',
    'BaseLink',
    'LinkReader',
    'MAVLinkVideoManager',
    'CameraInformation',
    'CommandLong',
    'InboundMessage',
    'MessageKind',
    'SetVideoStreamSettings',
    'VideoStreamInformation',
    'DEFAULT_FRAME_SIZES',
    'NO_SELECTION',
    'CameraRegistry',
    'FrameSize',
    'Stream',
    'CameraIdentity',
    'VideoSession',
]
