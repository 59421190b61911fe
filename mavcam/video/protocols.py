"""
MAVLink Camera Protocol Constants

Command ids, component ids and default parameters used for camera discovery
and video stream control. Values follow the MAVLink common dialect so they
can be handed to any codec without depending on pymavlink at import time.
"""

from typing import Tuple

from .registry import FrameSize

# =============================================================================
# Identity
# =============================================================================

# Ground station identity used as the sender of outbound commands
GCS_SYSTEM_ID = 255
MAV_COMP_ID_ALL = 0

# First camera component id; cameras occupy 100..105
MAV_COMP_ID_CAMERA = 100

MAV_TYPE_CAMERA = 30

# =============================================================================
# Commands (COMMAND_LONG)
# =============================================================================

MAV_CMD_REQUEST_CAMERA_INFORMATION = 521
MAV_CMD_REQUEST_VIDEO_STREAM_INFORMATION = 2504

# param1 of MAV_CMD_REQUEST_CAMERA_INFORMATION: 1 = request all cameras
REQUEST_ALL_CAMERAS = 1

# Stream id requested when refreshing stream information
DEFAULT_STREAM_ID = 1

# =============================================================================
# Inbound message names (pymavlink get_type() values)
# =============================================================================

MSG_HEARTBEAT = "HEARTBEAT"
MSG_CAMERA_INFORMATION = "CAMERA_INFORMATION"
MSG_VIDEO_STREAM_INFORMATION = "VIDEO_STREAM_INFORMATION"

# Outbound settings message
MSG_SET_VIDEO_STREAM_SETTINGS = "SET_VIDEO_STREAM_SETTINGS"

# =============================================================================
# Frame size catalog
# =============================================================================

# (0, 0) lets the camera pick its native resolution; always first
DEFAULT_FRAME_SIZES: Tuple[FrameSize, ...] = (
    FrameSize("Default", 0, 0),
    FrameSize("640x480", 640, 480),
    FrameSize("1280x720", 1280, 720),
    FrameSize("1920x1080", 1920, 1080),
)

# Selection index meaning "nothing selected"
NO_SELECTION = -1
