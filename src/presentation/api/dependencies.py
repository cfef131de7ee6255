from typing import Annotated
from zoneinfo import ZoneInfo

from fastapi import Depends

from src.application.interfaces import ILinkPreviewService, ITimelineClient
from src.application.services.image_proxy import ImageProxy
from src.application.use_cases.timelines import (EntryEnricher, PostService,
                                                 TimelineAggregationService,
                                                 TimelineResolver)
from src.domain.exceptions import ServiceUnavailableException
from src.infrastructure.config.settings import Settings, get_settings

# Global service instances (set during application startup)
_timeline_client: ITimelineClient | None = None
_link_preview_service: ILinkPreviewService | None = None


def set_timeline_client(client: ITimelineClient | None):
    """Set global upstream client (called on app startup)"""
    global _timeline_client
    _timeline_client = client


def set_link_preview_service(service: ILinkPreviewService | None):
    """Set global link preview service (called on app startup)"""
    global _link_preview_service
    _link_preview_service = service


def is_ready() -> bool:
    return _timeline_client is not None


async def get_timeline_client() -> ITimelineClient:
    """
    Upstream client dependency (singleton)

    The client is created in the application lifespan before requests are
    served. If startup could not reach the upstream server the client is
    never set and every dependent request answers 503.
    """
    if _timeline_client is None:
        raise ServiceUnavailableException()
    return _timeline_client


async def get_link_preview_service() -> ILinkPreviewService | None:
    return _link_preview_service


def get_image_proxy(settings: Annotated[Settings, Depends(get_settings)]) -> ImageProxy:
    return ImageProxy(settings.image_proxy_url, enabled=settings.image_proxy_enabled)


def get_timeline_resolver(
    client: Annotated[ITimelineClient, Depends(get_timeline_client)],
) -> TimelineResolver:
    return TimelineResolver(client)


def get_entry_enricher(
    client: Annotated[ITimelineClient, Depends(get_timeline_client)],
    link_previews: Annotated[ILinkPreviewService | None, Depends(get_link_preview_service)],
    image_proxy: Annotated[ImageProxy, Depends(get_image_proxy)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> EntryEnricher:
    return EntryEnricher(
        client,
        image_proxy,
        link_previews,
        rich_entries=settings.rich_entries_enabled,
        tz=ZoneInfo(settings.display_timezone),
    )


def get_aggregation_service(
    resolver: Annotated[TimelineResolver, Depends(get_timeline_resolver)],
    enricher: Annotated[EntryEnricher, Depends(get_entry_enricher)],
) -> TimelineAggregationService:
    return TimelineAggregationService(resolver, enricher)


def get_post_service(
    client: Annotated[ITimelineClient, Depends(get_timeline_client)],
    resolver: Annotated[TimelineResolver, Depends(get_timeline_resolver)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PostService:
    return PostService(client, resolver, settings.asset_host_url)
