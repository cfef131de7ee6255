from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from src.application.use_cases.timelines import (PostService,
                                                 TimelineAggregationService)
from src.domain.exceptions import (CrossOriginPostException,
                                   InvalidAssetReferenceException,
                                   TimelineNotFoundException)
from src.domain.value_objects import TimelineRef
from src.infrastructure.config.settings import Settings, get_settings
from src.presentation.api.dependencies import (get_aggregation_service,
                                               get_post_service)
from src.presentation.api.v1.schemas.timeline import (EmapResponse,
                                                      TimelinePostRequest,
                                                      TimelineResponse)
from src.presentation.middleware.rate_limit import limiter, post_rate_limit
from src.shared.telemetry.logging import get_logger
from src.shared.utils.emap import to_emap

logger = get_logger(__name__)

router = APIRouter()

TIMELINE_NOT_FOUND_TEXT = "指定のタイムラインが見つかりませんでした。"
CROSS_ORIGIN_TEXT = "このタイムラインへの投稿はこのサーバーからは許可されていません。"
INVALID_ICON_TEXT = "アイコンの指定が不正です。"


def _parse_ref(timeline_fqid: str, settings: Settings) -> TimelineRef:
    try:
        return TimelineRef.parse(timeline_fqid, default_host=settings.home_host)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid timeline id: {timeline_fqid}",
        ) from e


@router.get("/{timeline_fqid}", response_model=None)
async def get_timeline(
    timeline_fqid: str,
    service: Annotated[TimelineAggregationService, Depends(get_aggregation_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    output: Annotated[Literal["emap", "json"], Query(alias="format")] = "emap",
) -> EmapResponse | TimelineResponse:
    """
    Render a timeline for the virtual-world client.

    The default body is the ordered-map (emap) encoding the client reads;
    ``?format=json`` returns the same data as nested JSON for debugging.
    """
    ref = _parse_ref(timeline_fqid, settings)

    try:
        timeline = await service.aggregate(ref)
    except TimelineNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e

    if output == "json":
        return TimelineResponse.model_validate(timeline.to_dict())
    return JSONResponse(content=to_emap(timeline.to_dict()))


@router.post("/{timeline_fqid}", response_class=PlainTextResponse)
@limiter.limit(post_rate_limit)
async def post_to_timeline(
    request: Request,  # Required by slowapi for rate limiting (extracts client identity)
    timeline_fqid: str,
    payload: TimelinePostRequest,
    service: Annotated[PostService, Depends(get_post_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Post a message into a timeline hosted on this gateway's home server.

    Rate limit: 2 posts per 5 minutes per client (configurable)
    """
    ref = _parse_ref(timeline_fqid, settings)

    try:
        await service.submit_post(ref, payload.to_submission())
    except TimelineNotFoundException:
        return PlainTextResponse(TIMELINE_NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)
    except CrossOriginPostException as e:
        logger.warning(e.message)
        return PlainTextResponse(CROSS_ORIGIN_TEXT, status_code=status.HTTP_403_FORBIDDEN)
    except InvalidAssetReferenceException as e:
        logger.warning(e.message)
        return PlainTextResponse(INVALID_ICON_TEXT, status_code=status.HTTP_400_BAD_REQUEST)

    return "ok"
