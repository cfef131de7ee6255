"""OpenTelemetry setup for the gateway"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import \
    OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (BatchSpanProcessor,
                                            ConsoleSpanExporter, SpanExporter)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

logger = logging.getLogger(__name__)

# Service endpoints that would only add noise to traces
UNTRACED_URLS = "/health,/test"


class TelemetryConfig:
    """
    Tracer provider plus the instrumentations the gateway relies on.

    Spans cover incoming requests and every upstream call made through
    httpx (timeline, profile, message and summary lookups), so a slow
    timeline render can be pinned on the lookup that caused it.
    """

    def __init__(self, service_name: str, service_version: str, environment: str = "development"):
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    @staticmethod
    def _exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
        if exporter_type == "none":
            return None
        if exporter_type == "otlp":
            if otlp_endpoint:
                return OTLPSpanExporter(
                    endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
                )
            logger.warning("OTLP exporter selected without an endpoint, using console")
        return ConsoleSpanExporter()

    def setup(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider:
        """
        Install a global tracer provider.

        Args:
            exporter_type: "console", "otlp" or "none" (spans are created but dropped)
            otlp_endpoint: OTLP gRPC endpoint, e.g. "http://localhost:4317"
            sample_rate: Fraction of root traces kept (0.0-1.0)
        """
        resource = Resource.create(
            {
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        provider = TracerProvider(
            resource=resource, sampler=ParentBased(TraceIdRatioBased(sample_rate))
        )

        exporter = self._exporter(exporter_type, otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))

        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "Tracing initialized: service=%s exporter=%s sample_rate=%s",
            self.service_name,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument(self, app: FastAPI) -> None:
        """Instrument FastAPI, httpx and logging against the installed provider"""
        if self.tracer_provider is None:
            raise RuntimeError("setup() must be called before instrument()")

        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=self.tracer_provider, excluded_urls=UNTRACED_URLS
        )
        HTTPXClientInstrumentor().instrument(tracer_provider=self.tracer_provider)
        # adds trace_id / span_id to every log record
        LoggingInstrumentor().instrument(
            tracer_provider=self.tracer_provider, set_logging_format=True
        )

    def shutdown(self) -> None:
        """Flush pending spans"""
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
            self.tracer_provider = None
            logger.info("Tracing shut down")
