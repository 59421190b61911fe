"""Shared pytest configuration and fixtures for the mavcam test suite."""

import sys
from pathlib import Path
from typing import List

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "mavlink: test needs pymavlink installed"
    )


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fake_link():
    """A connected in-memory link."""
    from tests.infrastructure.mocks.link_mocks import FakeLink
    return FakeLink("udp0")


@pytest.fixture
def codec():
    """Codec double recording every encoded command."""
    from tests.infrastructure.mocks.link_mocks import RecordingCodec
    return RecordingCodec()


@pytest.fixture
def manager(codec):
    """Video manager wired to the recording codec with default config."""
    from mavcam.video.manager import MAVLinkVideoManager
    return MAVLinkVideoManager(codec=codec)


@pytest.fixture
def event_log(manager) -> List:
    """List collecting every VideoEvent the manager emits, in order."""
    events: List = []
    manager.subscribe_all(events.append)
    return events
