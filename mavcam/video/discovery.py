"""
Discovery Tracker

Watches liveness signals and starts camera discovery the first time a new
system shows up.
"""

from typing import Optional

from .commands import CommandSender
from .link import BaseLink
from .session import CameraIdentity, VideoSession
from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)


class DiscoveryTracker:

    def __init__(self, session: VideoSession, sender: CommandSender):
        self.session = session
        self.sender = sender

    def on_heartbeat(self, link: Optional[BaseLink], system_id: int, component_id: int = 0) -> bool:
        """
        Handle one liveness signal.

        A heartbeat from the tracked system is a no-op. A heartbeat from any
        other system replaces the tracked identity, makes ``link`` the active
        link and requests camera information from the new system.

        Returns:
            True if a camera information request was sent
        """
        identity = self.session.identity
        if identity is not None and identity.matches(system_id):
            return False

        logger.info(
            "First camera heartbeat from system %d (component %d) on %s",
            system_id, component_id, link.name if link else "no link"
        )
        self.session.identity = CameraIdentity(system_id=system_id, component_id=component_id)
        self.session.set_active_link(link)

        sent = self.sender.request_camera_information(system_id)
        if sent:
            logger.info("Requested camera information from system %d", system_id)
        return sent

    def refresh(self) -> bool:
        """Re-send the camera information request to the tracked system."""
        identity = self.session.identity
        if identity is None:
            logger.debug("No camera identity yet, nothing to refresh")
            return False
        return self.sender.request_camera_information(identity.system_id)


__all__ = ["DiscoveryTracker"]
