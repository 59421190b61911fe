"""
Base Link

Interface to the telemetry link carrying camera traffic. Link
implementations (serial, UDP, radio) live in the embedding application; the
video manager only borrows them.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseLink(ABC):
    """
    Abstract telemetry link.

    Several links may be open at once; at most one is marked preferred for
    camera traffic by the video manager.
    """

    def __init__(self, name: str = ""):
        self.name = name or type(self).__name__
        self._connected = False
        self._preferred = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    @property
    def is_connected(self) -> bool:
        """Check if the link can currently carry traffic."""
        return self._connected

    @property
    def preferred(self) -> bool:
        """True when this link is the preferred path for camera traffic."""
        return self._preferred

    def set_preferred(self, preferred: bool) -> None:
        self._preferred = preferred

    @abstractmethod
    def write_bytes(self, data: bytes) -> None:
        """
        Queue bytes for transmission.

        Fire and forget: implementations must not block the caller and report
        their own send failures.
        """
        ...

    @abstractmethod
    async def read(self) -> Optional[bytes]:
        """
        Read the next chunk of received bytes.

        Returns:
            Bytes received, or None if nothing is available right now
        """
        ...
