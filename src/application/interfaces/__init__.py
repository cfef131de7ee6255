"""
Application interfaces (ports).

Protocols the application layer depends on; infrastructure provides the
implementations.
"""

from src.application.interfaces.services import IImageProxy, ILinkPreviewService
from src.application.interfaces.upstream import (ITimelineClient, MediaItem,
                                                 ProfileOverride,
                                                 UpstreamMessage,
                                                 UpstreamProfile,
                                                 UpstreamTimeline)

__all__ = [
    "ITimelineClient",
    "ILinkPreviewService",
    "IImageProxy",
    "MediaItem",
    "ProfileOverride",
    "UpstreamMessage",
    "UpstreamProfile",
    "UpstreamTimeline",
]
