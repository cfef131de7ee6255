"""
Domain enumerations.
"""

from enum import Enum


class MessageKind(str, Enum):
    """Closed set of message kinds the gateway knows how to render"""

    MARKDOWN = "markdown"
    PLAINTEXT = "plaintext"
    MEDIA = "media"
    REROUTE = "reroute"
    UNKNOWN = "unknown"

    @property
    def is_text(self) -> bool:
        return self in (MessageKind.MARKDOWN, MessageKind.PLAINTEXT)
