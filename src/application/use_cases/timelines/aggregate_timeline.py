"""
Timeline aggregation use case.

Resolves a community timeline into display entries: one upstream lookup
for the timeline, one for the recent listing, then a sequential
enrichment pass over every message reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import TYPE_CHECKING

from src.application.services.identity_resolution import resolve_identity
from src.domain.entities import (AggregatedTimeline, Attachment, DisplayEntry,
                                 MessageRef, ReactionCount, TimelineInfo)
from src.domain.enums import MessageKind
from src.domain.exceptions import (MessageNotFoundException,
                                   TimelineNotFoundException)
from src.shared.telemetry.logging import get_logger
from src.shared.telemetry.tracing import add_span_attributes, traced
from src.shared.utils.relative_time import (JAPANESE_LABELS,
                                            RelativeTimeLabels,
                                            format_relative_time)
from src.shared.utils.url_extraction import extract_first_url

if TYPE_CHECKING:
    from src.application.interfaces import (IImageProxy, ILinkPreviewService,
                                            ITimelineClient, UpstreamMessage)
    from src.domain.value_objects import TimelineRef

logger = get_logger(__name__)


@dataclass
class ResolvedTimeline:
    info: TimelineInfo
    message_refs: list[MessageRef] = field(default_factory=list)


class TimelineResolver:
    """Maps a timeline reference to its metadata and recent message refs"""

    def __init__(self, client: "ITimelineClient") -> None:
        self.client = client

    async def get(self, ref: "TimelineRef") -> TimelineInfo:
        timeline = await self.client.get_timeline(ref)
        if timeline is None:
            raise TimelineNotFoundException(ref.fqid)
        return TimelineInfo(ref=ref, name=timeline.name, host=timeline.host)

    async def resolve(self, ref: "TimelineRef") -> ResolvedTimeline:
        """
        Fetch timeline metadata and its recent message references.

        Raises:
            TimelineNotFoundException: If the timeline does not exist
        """
        info = await self.get(ref)
        message_refs = await self.client.get_recent_messages([ref])
        return ResolvedTimeline(info=info, message_refs=list(message_refs))


class EntryEnricher:
    """
    Turns one message reference into a DisplayEntry.

    Returns None for message kinds the gateway does not render. Raises on
    upstream failures; the caller decides whether to skip the entry.
    """

    def __init__(
        self,
        client: "ITimelineClient",
        image_proxy: "IImageProxy",
        link_previews: "ILinkPreviewService | None" = None,
        *,
        rich_entries: bool = True,
        tz: tzinfo | None = None,
        labels: RelativeTimeLabels = JAPANESE_LABELS,
    ) -> None:
        self.client = client
        self.image_proxy = image_proxy
        self.link_previews = link_previews
        self.rich_entries = rich_entries
        self.tz = tz
        self.labels = labels

    def _renders(self, kind: MessageKind) -> bool:
        if kind.is_text:
            return True
        if kind in (MessageKind.MEDIA, MessageKind.REROUTE):
            return self.rich_entries
        return False

    async def enrich(self, ref: MessageRef, now: datetime | None = None) -> DisplayEntry | None:
        message = await self.client.get_message(ref.resource_id, ref.owner)
        if message is None:
            raise MessageNotFoundException(ref.resource_id, ref.owner)

        if not self._renders(message.kind):
            logger.debug("Skipping %s message %s", message.kind.value, ref.resource_id)
            return None

        source = message
        if message.kind is MessageKind.REROUTE:
            source = await self._resolve_reroute(message)

        name, avatar = await self._identity(source)
        reactions = await self._reactions(ref)

        attachments: list[Attachment] = []
        if source.kind is MessageKind.MEDIA:
            attachments = [
                Attachment(kind=media.media_type, url=self.image_proxy.rewrite(media.url))
                for media in source.medias
            ]

        link_preview = None
        if self.rich_entries and self.link_previews is not None:
            link_preview = await self.link_previews.preview(extract_first_url(source.body))

        return DisplayEntry(
            name=name,
            avatar=self.image_proxy.rewrite(avatar),
            message=source.body,
            timestamp=format_relative_time(ref.cdate, now, tz=self.tz, labels=self.labels),
            attachments=attachments,
            reactions=reactions,
            link_preview=link_preview,
        )

    async def _resolve_reroute(self, reroute: "UpstreamMessage") -> "UpstreamMessage":
        # one level only: a reroute of a reroute renders the inner reroute as-is
        if not reroute.reroute_message_id or not reroute.reroute_message_author:
            raise MessageNotFoundException(reroute.id, reroute.author)

        original = await self.client.get_message(
            reroute.reroute_message_id, reroute.reroute_message_author
        )
        if original is None:
            raise MessageNotFoundException(
                reroute.reroute_message_id, reroute.reroute_message_author
            )
        return original

    async def _identity(self, message: "UpstreamMessage") -> tuple[str, str]:
        canonical = await self.client.get_author_profile(message.author)

        override = message.profile_override
        override_profile = None
        if override is not None and override.profile_id:
            override_profile = await self.client.get_profile(override.profile_id, message.author)

        identity = resolve_identity(override, canonical, override_profile)
        return identity.name, identity.avatar

    async def _reactions(self, ref: MessageRef) -> list[ReactionCount]:
        counts = await self.client.get_reaction_counts(ref.resource_id, ref.owner)
        return [
            ReactionCount(key=self.image_proxy.rewrite(key), count=count)
            for key, count in counts.items()
        ]


class TimelineAggregationService:
    """Aggregates a timeline into display entries with partial-result semantics"""

    def __init__(self, resolver: TimelineResolver, enricher: EntryEnricher) -> None:
        self.resolver = resolver
        self.enricher = enricher

    @traced("timeline.aggregate")
    async def aggregate(self, ref: "TimelineRef") -> AggregatedTimeline:
        """
        Build the display timeline for ref.

        Entries keep the order of the upstream listing. A message that
        fails to enrich is logged and left out; it never fails the batch.

        Raises:
            TimelineNotFoundException: If the timeline does not exist
        """
        resolved = await self.resolver.resolve(ref)
        now = datetime.now(timezone.utc)

        entries: list[DisplayEntry] = []
        for message_ref in resolved.message_refs:
            try:
                entry = await self.enricher.enrich(message_ref, now)
            except Exception as e:
                logger.error(
                    f"Error enriching message {message_ref.resource_id} "
                    f"on {ref.fqid}: {e}"
                )
                continue
            if entry is not None:
                entries.append(entry)

        add_span_attributes(
            timeline_id=ref.fqid,
            message_refs=len(resolved.message_refs),
            entries=len(entries),
        )
        logger.info(
            "Aggregated %s: %d/%d entries", ref.fqid, len(entries), len(resolved.message_refs)
        )
        return AggregatedTimeline(name=resolved.info.name, entries=entries)
