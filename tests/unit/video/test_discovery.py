"""Unit tests for heartbeat-driven camera discovery."""

from mavcam.video.protocols import (
    MAV_CMD_REQUEST_CAMERA_INFORMATION,
    MAV_COMP_ID_CAMERA,
    REQUEST_ALL_CAMERAS,
)
from mavcam.video.session import CameraIdentity
from tests.infrastructure.mocks.link_mocks import FakeLink


class TestHeartbeat:
    """Tests for on_heartbeat identity tracking."""

    def test_first_heartbeat_requests_camera_information(self, manager, codec, fake_link):
        manager.on_heartbeat(fake_link, 7)

        assert len(codec.encoded) == 1
        command = codec.encoded[0]
        assert command.command == MAV_CMD_REQUEST_CAMERA_INFORMATION
        assert command.target_system == 7
        assert command.target_component == MAV_COMP_ID_CAMERA
        assert command.params == (REQUEST_ALL_CAMERAS, 0, 0, 0, 0, 0, 0)
        assert len(fake_link.written) == 1

    def test_first_heartbeat_records_identity_and_link(self, manager, fake_link):
        manager.on_heartbeat(fake_link, 7, 100)

        assert manager.camera_identity == CameraIdentity(7, 100)
        assert manager.active_link is fake_link
        assert fake_link.preferred

    def test_repeat_heartbeat_is_idempotent(self, manager, codec, fake_link):
        manager.on_heartbeat(fake_link, 7)
        manager.on_heartbeat(fake_link, 7)
        manager.on_heartbeat(FakeLink("other"), 7)

        assert len(codec.commands_with_id(MAV_CMD_REQUEST_CAMERA_INFORMATION)) == 1
        assert manager.active_link is fake_link

    def test_new_system_replaces_identity(self, manager, codec, fake_link):
        radio = FakeLink("radio0")

        manager.on_heartbeat(fake_link, 7)
        manager.on_heartbeat(radio, 9)

        requests = codec.commands_with_id(MAV_CMD_REQUEST_CAMERA_INFORMATION)
        assert [r.target_system for r in requests] == [7, 9]
        assert manager.camera_identity.system_id == 9
        assert manager.active_link is radio
        assert radio.preferred
        assert not fake_link.preferred

    def test_no_link_drops_request(self, manager, codec):
        manager.on_heartbeat(None, 7)

        assert codec.encoded == []
        assert manager.camera_identity.system_id == 7

    def test_disconnected_link_drops_request_without_retry(self, manager, codec):
        link = FakeLink(connected=False)

        manager.on_heartbeat(link, 7)
        link.set_connected(True)
        manager.on_heartbeat(link, 7)

        assert codec.encoded == []
        assert link.written == []

    def test_unsupported_command_is_dropped(self, fake_link):
        from mavcam.video.manager import MAVLinkVideoManager
        from mavcam.video.messages import CommandLong
        from tests.infrastructure.mocks.link_mocks import RecordingCodec

        codec = RecordingCodec(unsupported=(CommandLong,))
        manager = MAVLinkVideoManager(codec=codec)

        manager.on_heartbeat(fake_link, 7)

        assert fake_link.written == []


class TestRefreshVideoProvider:
    """Tests for re-requesting camera information."""

    def test_refresh_without_identity(self, manager, codec):
        assert manager.refresh_video_provider() is False
        assert codec.encoded == []

    def test_refresh_resends_request(self, manager, codec, fake_link):
        manager.on_heartbeat(fake_link, 7)

        assert manager.refresh_video_provider() is True

        requests = codec.commands_with_id(MAV_CMD_REQUEST_CAMERA_INFORMATION)
        assert len(requests) == 2
        assert requests[1].target_system == 7

    def test_refresh_after_link_lost(self, manager, codec, fake_link):
        manager.on_heartbeat(fake_link, 7)
        fake_link.set_connected(False)

        assert manager.refresh_video_provider() is False
        assert len(codec.encoded) == 1
