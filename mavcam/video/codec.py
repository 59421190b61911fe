"""
Message Codec Interface

The wire format is owned by an external codec. The video manager only needs
to turn typed commands into bytes and bytes into typed messages.
"""

from typing import List, Optional, Protocol, runtime_checkable

from .messages import InboundMessage, OutboundCommand


@runtime_checkable
class MessageCodec(Protocol):
    """Encoder/decoder for the telemetry wire format."""

    def encode(self, command: OutboundCommand) -> Optional[bytes]:
        """
        Encode a command for transmission.

        Returns:
            Wire bytes, or None if the dialect cannot express the command
        """
        ...

    def decode(self, data: bytes) -> List[InboundMessage]:
        """
        Feed received bytes to the parser.

        Partial frames are buffered by the codec; only complete messages are
        returned.
        """
        ...
