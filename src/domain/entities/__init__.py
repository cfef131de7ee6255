"""Domain entities."""

from src.domain.entities.timeline import (AggregatedTimeline, Attachment,
                                          DisplayEntry, LinkPreview,
                                          MessageRef, ReactionCount,
                                          TimelineInfo)

__all__ = [
    "AggregatedTimeline",
    "Attachment",
    "DisplayEntry",
    "LinkPreview",
    "MessageRef",
    "ReactionCount",
    "TimelineInfo",
]
