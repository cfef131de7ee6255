"""
Domain layer - Enterprise Business Rules.

This is the innermost layer containing display entities, value objects,
and domain exceptions. It has no dependencies on other layers.
"""

from src.domain.entities import (AggregatedTimeline, Attachment, DisplayEntry,
                                 LinkPreview, MessageRef, ReactionCount,
                                 TimelineInfo)
from src.domain.enums import MessageKind
from src.domain.exceptions import (CrossOriginPostException, GatewayException,
                                   InvalidAssetReferenceException,
                                   MessageNotFoundException,
                                   ServiceUnavailableException,
                                   TimelineNotFoundException)
from src.domain.value_objects import TimelineRef

__all__ = [
    # Entities
    "AggregatedTimeline",
    "Attachment",
    "DisplayEntry",
    "LinkPreview",
    "MessageRef",
    "ReactionCount",
    "TimelineInfo",
    # Value Objects
    "TimelineRef",
    # Enums
    "MessageKind",
    # Exceptions
    "GatewayException",
    "TimelineNotFoundException",
    "CrossOriginPostException",
    "InvalidAssetReferenceException",
    "MessageNotFoundException",
    "ServiceUnavailableException",
]
