"""
Display entities for aggregated timelines.

These are built fresh for every request and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.value_objects.core import TimelineRef


@dataclass(frozen=True)
class MessageRef:
    """Pointer to a message as returned by the recent-timeline listing"""

    resource_id: str
    owner: str
    cdate: datetime
    timeline_id: str | None = None
    author: str | None = None
    schema: str | None = None


@dataclass(frozen=True)
class Attachment:
    kind: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "url": self.url}


@dataclass(frozen=True)
class ReactionCount:
    key: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.key, "count": self.count}


@dataclass(frozen=True)
class LinkPreview:
    url: str
    thumbnail: str | None = None
    title: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Missing fields are left out rather than sent as null"""
        data = {
            "url": self.url,
            "thumbnail": self.thumbnail,
            "title": self.title,
            "description": self.description,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass
class DisplayEntry:
    """
    One rendered timeline entry.

    Field order of to_dict() is part of the wire contract: the ordered-map
    encoder emits keys in this order.
    """

    name: str
    avatar: str
    message: str
    timestamp: str
    attachments: list[Attachment] = field(default_factory=list)
    reactions: list[ReactionCount] = field(default_factory=list)
    link_preview: LinkPreview | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "avatar": self.avatar,
            "message": self.message,
            "medias": [a.to_dict() for a in self.attachments],
            "timestamp": self.timestamp,
            "reactions": [r.to_dict() for r in self.reactions],
        }
        if self.link_preview is not None:
            data["url"] = self.link_preview.to_dict()
        return data


@dataclass(frozen=True)
class TimelineInfo:
    """Timeline metadata needed by the gateway"""

    ref: TimelineRef
    name: str
    host: str


@dataclass
class AggregatedTimeline:
    name: str
    entries: list[DisplayEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "entries": [entry.to_dict() for entry in self.entries],
        }
