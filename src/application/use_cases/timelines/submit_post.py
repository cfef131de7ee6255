"""
Post submission use case.

Forwards a message from the virtual-world client into a timeline hosted
on the gateway's home server, under the identity the client supplies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.application.interfaces.upstream import MediaItem, ProfileOverride
from src.domain.exceptions import CrossOriginPostException
from src.shared.telemetry.logging import get_logger
from src.shared.telemetry.tracing import traced
from src.shared.utils.assets import asset_url_from_reference

if TYPE_CHECKING:
    from src.application.interfaces import ITimelineClient
    from src.application.use_cases.timelines.aggregate_timeline import \
        TimelineResolver
    from src.domain.value_objects import TimelineRef

logger = get_logger(__name__)

POSTED_MEDIA_TYPE = "image"


@dataclass(frozen=True)
class PostSubmission:
    username: str
    icon_reference: str
    message: str
    medias: list[str] = field(default_factory=list)


class PostService:
    """Validates a post target and submits the message upstream"""

    def __init__(
        self,
        client: "ITimelineClient",
        resolver: "TimelineResolver",
        asset_host_url: str,
    ) -> None:
        self.client = client
        self.resolver = resolver
        self.asset_host_url = asset_host_url

    @traced("timeline.submit_post")
    async def submit_post(self, ref: "TimelineRef", submission: PostSubmission) -> None:
        """
        Submit a post to ref.

        Media URLs turn the post into a media message with one image
        attachment per URL; otherwise a markdown message is sent. Both
        carry the caller's username and avatar as a profile override.

        Raises:
            TimelineNotFoundException: If the timeline does not exist
            CrossOriginPostException: If the timeline lives on another host
            InvalidAssetReferenceException: If the avatar reference is malformed
        """
        timeline = await self.resolver.get(ref)
        if timeline.host != self.client.host:
            raise CrossOriginPostException(ref.fqid, timeline.host, self.client.host)

        avatar = asset_url_from_reference(submission.icon_reference, self.asset_host_url)
        override = ProfileOverride(username=submission.username, avatar=avatar)

        if submission.medias:
            medias = [MediaItem(url=url, media_type=POSTED_MEDIA_TYPE) for url in submission.medias]
            await self.client.create_media_message(submission.message, [ref], override, medias)
        else:
            await self.client.create_markdown_message(submission.message, [ref], override)

        logger.info(
            f"Posted to {ref.fqid} as {submission.username!r} "
            f"({len(submission.medias)} media)"
        )
