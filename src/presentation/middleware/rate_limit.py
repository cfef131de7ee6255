"""Per-client rate limiting for timeline posts"""
import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from src.infrastructure.config.settings import get_settings

logger = logging.getLogger(__name__)


def get_client_identity(request: Request) -> str:
    """
    Rate limit key: the X-Forwarded-For header when present, else the peer.

    The virtual-world client reaches the gateway through its own proxy,
    so the header is the only per-user signal available.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.strip()
    return get_remote_address(request)


def post_rate_limit() -> str:
    return get_settings().post_rate_limit


# One counter per client and endpoint: every spelling of a timeline id
# (bare id, id@host, padded) shares the same post allowance
limiter = Limiter(key_func=get_client_identity, key_style="endpoint")


def rate_limit_exceeded_handler(request: Request, exc: Exception) -> Response:
    """Answer with the fixed rejection text the client shows verbatim"""
    detail = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    logger.warning(
        f"Rate limit exceeded for {get_client_identity(request)} "
        f"on {request.method} {request.url.path}: {detail}"
    )
    return PlainTextResponse(get_settings().rate_limit_message, status_code=429)
