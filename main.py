import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from src.application.services.image_proxy import ImageProxy
from src.domain.exceptions import ServiceUnavailableException
from src.infrastructure.config.settings import get_settings
from src.infrastructure.exceptions import UpstreamException
from src.infrastructure.external.concrnt.client import ConcrntClient
from src.infrastructure.external.concrnt.signer import SubkeySigner
from src.infrastructure.external.summary.client import SummaryLinkPreviewService
from src.presentation.api.dependencies import (is_ready,
                                               set_link_preview_service,
                                               set_timeline_client)
from src.presentation.api.v1.routes import timelines
from src.presentation.middleware.rate_limit import (limiter,
                                                    rate_limit_exceeded_handler)
from src.presentation.middleware.security import (AccessLogMiddleware,
                                                  RequestSizeLimitMiddleware)
from src.shared.telemetry.logging import setup_logging
from src.shared.telemetry.telemetry import TelemetryConfig

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for application initialization and cleanup"""
    setup_logging()

    # One pooled HTTP client for every upstream call
    http = httpx.AsyncClient(
        timeout=settings.upstream_timeout,
        headers={"User-Agent": f"{settings.app_name}/{settings.app_version}"},
        follow_redirects=True,
    )

    # The upstream client must be ready before requests are served;
    # if the home server cannot be reached, routes answer 503 instead.
    client = ConcrntClient(http, SubkeySigner(settings.credential))
    try:
        await client.connect(
            attempts=settings.upstream_connect_attempts,
            retry_delay=settings.upstream_connect_retry_delay,
        )
        set_timeline_client(client)
    except UpstreamException as e:
        logger.error(f"Upstream client initialization failed: {e}. Serving 503.")

    image_proxy = ImageProxy(settings.image_proxy_url, enabled=settings.image_proxy_enabled)
    set_link_preview_service(
        SummaryLinkPreviewService(http, settings.summary_service_url, image_proxy)
    )

    yield

    set_timeline_client(None)
    set_link_preview_service(None)
    await http.aclose()
    logger.info("HTTP client closed")

    if telemetry is not None:
        telemetry.shutdown()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(ServiceUnavailableException)
async def service_unavailable_handler(request: Request, exc: ServiceUnavailableException):
    return JSONResponse(status_code=503, content=exc.to_dict())


@app.exception_handler(UpstreamException)
async def upstream_error_handler(request: Request, exc: UpstreamException):
    logger.error(f"Upstream error on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=502, content=exc.to_dict())


# Middleware (the last one registered runs first)
# 1. Request size limit
app.add_middleware(RequestSizeLimitMiddleware, max_request_size=settings.max_request_size)

# 2. Access log with request id (also logs rejected bodies)
app.add_middleware(AccessLogMiddleware)

# 3. Client address from trusted proxies
if settings.trusted_proxies:
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=settings.trusted_proxies)

# Routers
app.include_router(timelines.router, prefix="/timeline", tags=["timeline"])

# Distributed tracing (instrumentation must happen before the app starts)
telemetry: TelemetryConfig | None = None
if settings.telemetry_enabled:
    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        environment=settings.telemetry_environment,
    )
    try:
        telemetry.setup(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument(app)
    except Exception as e:
        logger.exception(f"Tracing setup failed, continuing without it: {e}")
        telemetry = None


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for load balancers and monitoring.

    Returns:
    - 200 OK if the upstream client finished initializing
    - 503 Service Unavailable otherwise
    """
    checks = {
        "api": True,  # If we got here, API is responding
        "upstream": is_ready(),
    }
    if all(checks.values()):
        return {"status": "healthy", "checks": checks}
    return JSONResponse(status_code=503, content={"status": "unhealthy", "checks": checks})


@app.get("/test", response_class=PlainTextResponse)
async def echo(request: Request):
    """Log how the gateway sees the caller (address and headers)"""
    logger.info(f"Echo from {request.client.host if request.client else 'unknown'}")
    logger.info(f"Echo headers: {dict(request.headers)}")
    return "ok"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        forwarded_allow_ips=settings.proxy_ip or None,
    )
