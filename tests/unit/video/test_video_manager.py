"""Integration-style tests for MAVLinkVideoManager.

Covers the full discovery scenario, raw byte dispatch, event listeners and
the query surface exposed to presentation code.
"""

from unittest.mock import MagicMock

from mavcam.video.events import EventEmitter, VideoEvent
from mavcam.video.manager import MAVLinkVideoManager
from mavcam.video.messages import CommandLong, InboundMessage
from mavcam.video.protocols import (
    DEFAULT_FRAME_SIZES,
    MAV_CMD_REQUEST_CAMERA_INFORMATION,
    MAV_CMD_REQUEST_VIDEO_STREAM_INFORMATION,
    MAV_TYPE_CAMERA,
    NO_SELECTION,
)
from mavcam.video.registry import FrameSize

MAV_TYPE_GCS = 6


class TestDiscoveryScenario:
    """Heartbeat -> camera information -> stream information, end to end."""

    def test_scenario(self, manager, codec, fake_link):
        manager.on_heartbeat(fake_link, 7)
        assert codec.encoded == [
            CommandLong(7, 100, MAV_CMD_REQUEST_CAMERA_INFORMATION, (1, 0, 0, 0, 0, 0, 0)),
        ]

        manager.on_message(fake_link, InboundMessage.camera_information(7, 100, 3, "GimbalCam"))
        assert [(s.camera_id, s.name, s.uri) for s in manager.stream_list] == [(3, "GimbalCam", "")]
        assert manager.selected_stream == 0
        assert codec.encoded[-1] == CommandLong(
            7, 100, MAV_CMD_REQUEST_VIDEO_STREAM_INFORMATION, (3, 1, 0, 0, 0, 0, 0)
        )

        manager.on_message(
            fake_link, InboundMessage.video_stream_information(7, 100, 3, "rtsp://10.0.0.1:8554/cam")
        )
        assert manager.get_video_uri() == "rtsp://10.0.0.1:8554/cam"

        manager.on_message(fake_link, InboundMessage.camera_information(7, 100, 3, "GimbalCam"))
        assert len(manager.stream_list) == 1
        assert len(codec.encoded) == 2
        assert len(fake_link.written) == 2


class TestHandleBytes:
    """Tests for decoding raw link bytes."""

    def test_heartbeat_and_messages_in_one_buffer(self, manager, codec, fake_link):
        data = codec.frame(
            InboundMessage.heartbeat(7, 100, mav_type=MAV_TYPE_CAMERA),
            InboundMessage.camera_information(7, 100, 3, "GimbalCam"),
            InboundMessage.video_stream_information(7, 100, 3, "rtsp://cam"),
        )

        assert manager.handle_bytes(fake_link, data) == 3

        assert manager.camera_identity.system_id == 7
        assert manager.current_uri == "rtsp://cam"

    def test_decode_failure_is_contained(self, manager, fake_link):
        assert manager.handle_bytes(fake_link, b"garbage") == 0
        assert manager.camera_identity is None

    def test_heartbeat_from_other_system_in_stream(self, manager, codec, fake_link):
        manager.handle_bytes(fake_link, codec.frame(InboundMessage.heartbeat(7, 100, mav_type=MAV_TYPE_CAMERA)))
        manager.handle_bytes(fake_link, codec.frame(InboundMessage.heartbeat(7, 1, mav_type=MAV_TYPE_CAMERA)))

        assert len(codec.commands_with_id(MAV_CMD_REQUEST_CAMERA_INFORMATION)) == 1

    def test_non_camera_heartbeats_do_not_steal_identity(self, manager, codec, fake_link):
        camera_hb = InboundMessage.heartbeat(1, 100, mav_type=MAV_TYPE_CAMERA)
        gcs_hb = InboundMessage.heartbeat(255, 190, mav_type=MAV_TYPE_GCS)

        manager.handle_message(fake_link, camera_hb)
        manager.handle_message(fake_link, gcs_hb)
        manager.handle_message(fake_link, InboundMessage.camera_information(1, 100, 3, "GimbalCam"))
        manager.handle_message(fake_link, gcs_hb)
        manager.handle_message(fake_link, camera_hb)

        assert manager.camera_identity.system_id == 1
        assert len(codec.commands_with_id(MAV_CMD_REQUEST_CAMERA_INFORMATION)) == 1
        assert [s.camera_id for s in manager.stream_list] == [3]

    def test_direct_heartbeat_callback_accepts_any_system(self, manager, fake_link):
        manager.on_heartbeat(fake_link, 255, 190)

        assert manager.camera_identity.system_id == 255


class TestQueries:
    """Tests for the read-only query surface."""

    def test_initial_state(self, manager):
        assert manager.stream_list == ()
        assert manager.selected_stream == NO_SELECTION
        assert manager.frame_size_list == DEFAULT_FRAME_SIZES
        assert manager.current_frame_size == 0
        assert manager.current_uri == ""
        assert manager.camera_identity is None
        assert manager.active_link is None

    def test_stream_list_is_a_snapshot(self, manager, fake_link):
        manager.on_heartbeat(fake_link, 7)
        manager.on_message(fake_link, InboundMessage.camera_information(7, 100, 3, "GimbalCam"))

        streams = manager.stream_list
        streams[0].uri = "tampered"

        assert manager.current_uri == ""

    def test_custom_frame_sizes(self, codec):
        manager = MAVLinkVideoManager(codec=codec, frame_sizes=[FrameSize("4K", 3840, 2160)])

        assert [fs.name for fs in manager.frame_size_list] == ["Default", "4K"]


class TestListeners:
    """Tests for change notification delivery."""

    def test_subscribe_specific_event(self, manager, fake_link):
        listener = MagicMock()
        manager.subscribe(VideoEvent.STREAM_LIST_CHANGED, listener)

        manager.on_heartbeat(fake_link, 7)
        manager.on_message(fake_link, InboundMessage.camera_information(7, 100, 3, "GimbalCam"))

        listener.assert_called_once_with(VideoEvent.STREAM_LIST_CHANGED)

    def test_unsubscribe(self, manager):
        listener = MagicMock()
        manager.subscribe(VideoEvent.STREAM_LIST_CHANGED, listener)
        manager.unsubscribe(VideoEvent.STREAM_LIST_CHANGED, listener)

        manager.reset_session()

        listener.assert_not_called()

    def test_failing_listener_does_not_break_others(self, manager):
        failing = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        manager.subscribe(VideoEvent.STREAM_LIST_CHANGED, failing)
        manager.subscribe(VideoEvent.STREAM_LIST_CHANGED, healthy)

        manager.reset_session()

        failing.assert_called_once()
        healthy.assert_called_once_with(VideoEvent.STREAM_LIST_CHANGED)
        assert manager.stream_list == ()


class TestEventEmitter:
    """Tests for EventEmitter bookkeeping."""

    def test_duplicate_subscription_is_ignored(self):
        emitter = EventEmitter()
        listener = MagicMock()

        emitter.subscribe(VideoEvent.CURRENT_URI_CHANGED, listener)
        emitter.subscribe(VideoEvent.CURRENT_URI_CHANGED, listener)
        emitter.emit(VideoEvent.CURRENT_URI_CHANGED)

        assert emitter.listener_count(VideoEvent.CURRENT_URI_CHANGED) == 1
        listener.assert_called_once()

    def test_unsubscribe_unknown_listener(self):
        emitter = EventEmitter()
        emitter.unsubscribe(VideoEvent.CURRENT_URI_CHANGED, MagicMock())

        assert emitter.listener_count(VideoEvent.CURRENT_URI_CHANGED) == 0

    def test_listener_may_unsubscribe_during_emit(self):
        emitter = EventEmitter()
        calls = []

        def once(event):
            calls.append(event)
            emitter.unsubscribe(event, once)

        emitter.subscribe(VideoEvent.STREAM_LIST_CHANGED, once)
        emitter.emit(VideoEvent.STREAM_LIST_CHANGED)
        emitter.emit(VideoEvent.STREAM_LIST_CHANGED)

        assert calls == [VideoEvent.STREAM_LIST_CHANGED]

    def test_clear(self):
        emitter = EventEmitter()
        emitter.subscribe_all(MagicMock())
        emitter.clear()

        assert all(emitter.listener_count(event) == 0 for event in VideoEvent)
