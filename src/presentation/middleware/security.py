"""Request guards and access logging"""
import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from src.presentation.middleware.rate_limit import get_client_identity
from src.shared.telemetry.tracing import current_trace_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PAYLOAD_TOO_LARGE_TEXT = "投稿内容が大きすぎます。"

CallNext = Callable[[Request], Awaitable[Response]]


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject request bodies larger than ``max_request_size`` bytes.

    Posts are a short message and a few media URLs. The check uses the
    declared Content-Length so oversized bodies are never read.
    """

    def __init__(self, app, max_request_size: int = 1024 * 1024) -> None:
        super().__init__(app)
        self.max_request_size = max_request_size

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        declared = request.headers.get("content-length")
        if declared is None:
            return await call_next(request)

        if not declared.isdigit():
            logger.warning(f"Invalid Content-Length {declared!r} from {get_client_identity(request)}")
            return PlainTextResponse("Invalid Content-Length", status_code=400)

        if int(declared) > self.max_request_size:
            logger.warning(
                f"Rejected {declared} byte body (limit {self.max_request_size}) "
                f"from {get_client_identity(request)}"
            )
            return PlainTextResponse(PAYLOAD_TOO_LARGE_TEXT, status_code=413)

        return await call_next(request)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    One log line per request, tagged with a request id.

    The id is taken from X-Request-ID when the caller's proxy sets one and
    is echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "%s %s %s -> %d in %.1fms (client=%s trace=%s)",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            get_client_identity(request),
            current_trace_id() or "-",
        )
        return response
