"""Unit tests for the asyncio link reader.

Async tests use a run_async() helper so pytest-asyncio is not required.
"""

import asyncio

from mavcam.video.config import VideoConfig
from mavcam.video.link_reader import LinkReader
from mavcam.video.manager import MAVLinkVideoManager
from mavcam.video.messages import InboundMessage
from mavcam.video.protocols import MAV_TYPE_CAMERA


def run_async(coro):
    """Run async coroutine synchronously for testing."""
    return asyncio.run(coro)


async def _drain(link, reader, timeout=1.0):
    """Wait until the link has no queued input left."""
    deadline = asyncio.get_running_loop().time() + timeout
    while link.pending and asyncio.get_running_loop().time() < deadline:
        await asyncio.sleep(0.005)
    # one more pass so the last chunk is dispatched
    await asyncio.sleep(0.02)


def fast_config(**overrides):
    values = dict(read_error_backoff=0.001, max_error_backoff=0.002, max_consecutive_errors=3)
    values.update(overrides)
    return VideoConfig(**values)


class TestLinkReader:
    """Tests for LinkReader dispatch and error handling."""

    def test_dispatches_received_bytes(self, codec, fake_link):
        manager = MAVLinkVideoManager(codec=codec, config=fast_config())
        fake_link.feed(codec.frame(InboundMessage.heartbeat(7, 100, mav_type=MAV_TYPE_CAMERA)))
        fake_link.feed(codec.frame(InboundMessage.camera_information(7, 100, 3, "GimbalCam")))

        async def scenario():
            reader = LinkReader(fake_link, manager, idle_delay=0.001)
            await reader.start()
            await _drain(fake_link, reader)
            await reader.stop()
            return reader

        reader = run_async(scenario())

        assert not reader.is_running
        assert manager.camera_identity.system_id == 7
        assert len(manager.stream_list) == 1
        # camera information request + stream information request
        assert len(fake_link.written) == 2

    def test_recovers_from_transient_errors(self, codec, fake_link):
        manager = MAVLinkVideoManager(codec=codec, config=fast_config())
        fake_link.feed(OSError("rx overrun"))
        fake_link.feed(codec.frame(InboundMessage.heartbeat(7, 100, mav_type=MAV_TYPE_CAMERA)))

        async def scenario():
            reader = LinkReader(fake_link, manager, idle_delay=0.001)
            await reader.start()
            await _drain(fake_link, reader)
            running = reader.is_running
            errors = reader.consecutive_errors
            await reader.stop()
            return running, errors

        running, errors = run_async(scenario())

        assert running
        assert errors == 0
        assert manager.camera_identity is not None

    def test_stops_after_consecutive_errors(self, codec, fake_link):
        manager = MAVLinkVideoManager(codec=codec, config=fast_config(max_consecutive_errors=3))
        for _ in range(5):
            fake_link.feed(OSError("device gone"))

        async def scenario():
            reader = LinkReader(fake_link, manager, idle_delay=0.001)
            await reader.start()
            await asyncio.wait_for(reader.wait_closed(), timeout=1.0)
            return reader

        reader = run_async(scenario())

        assert not reader.is_running
        assert reader.consecutive_errors == 3
        assert fake_link.pending == 2

    def test_double_start_is_ignored(self, codec, fake_link):
        manager = MAVLinkVideoManager(codec=codec)

        async def scenario():
            reader = LinkReader(fake_link, manager, idle_delay=0.001)
            await reader.start()
            first_task = reader._read_task
            await reader.start()
            same = reader._read_task is first_task
            await reader.stop()
            return same

        assert run_async(scenario())
