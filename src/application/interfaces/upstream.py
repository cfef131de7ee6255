"""
Upstream social-network interfaces (ports).

The gateway never talks to the social network directly; it goes through
an ITimelineClient. The dataclasses below are the already-parsed shapes
the client hands back, free of wire-format details.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from src.domain.enums import MessageKind

if TYPE_CHECKING:
    from src.domain.entities import MessageRef
    from src.domain.value_objects import TimelineRef


@dataclass(frozen=True)
class ProfileOverride:
    """Per-message identity chosen by the poster"""

    username: str | None = None
    avatar: str | None = None
    profile_id: str | None = None


@dataclass(frozen=True)
class MediaItem:
    url: str
    media_type: str


@dataclass(frozen=True)
class UpstreamProfile:
    id: str | None
    author: str | None
    username: str | None = None
    avatar: str | None = None


@dataclass(frozen=True)
class UpstreamMessage:
    id: str
    author: str
    schema: str
    kind: MessageKind
    body: str = ""
    profile_override: ProfileOverride | None = None
    medias: list[MediaItem] = field(default_factory=list)
    reroute_message_id: str | None = None
    reroute_message_author: str | None = None


@dataclass(frozen=True)
class UpstreamTimeline:
    id: str
    host: str
    name: str
    schema: str | None = None


class ITimelineClient(Protocol):
    """Protocol for the upstream social-network client (DIP)"""

    @property
    def host(self) -> str:
        """Home host of the credential the client posts with"""
        ...

    async def get_timeline(self, ref: TimelineRef) -> UpstreamTimeline | None:
        """Fetch timeline metadata, None if it does not exist"""
        ...

    async def get_recent_messages(self, refs: list[TimelineRef]) -> list[MessageRef]:
        """List recent message references for the given timelines"""
        ...

    async def get_author_profile(self, owner: str) -> UpstreamProfile | None:
        """Fetch the canonical profile of an entity"""
        ...

    async def get_profile(self, profile_id: str, author: str) -> UpstreamProfile | None:
        """Fetch a specific profile document"""
        ...

    async def get_message(self, message_id: str, author: str) -> UpstreamMessage | None:
        """Fetch a message from its author's home server"""
        ...

    async def get_reaction_counts(self, message_id: str, author: str) -> dict[str, int]:
        """Count reaction associations on a message, keyed by reaction"""
        ...

    async def create_markdown_message(
        self, body: str, timelines: list[TimelineRef], profile_override: ProfileOverride
    ) -> None:
        """Post a markdown message"""
        ...

    async def create_media_message(
        self,
        body: str,
        timelines: list[TimelineRef],
        profile_override: ProfileOverride,
        medias: list[MediaItem],
    ) -> None:
        """Post a media message"""
        ...
