"""OpenTelemetry tracing setup for the task tracker.

Exporters: console (development), OTLP gRPC, or none. The tracer provider
is kept on the TelemetryConfig registered with set_telemetry() rather than
installed as the process-global provider; get_tracer() reads it from there,
so an app (or a test) can swap providers without restarting the process.
"""

import logging
import threading

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

logger = logging.getLogger(__name__)

# Health checks are polled too often to be worth a span each.
UNTRACED_URLS = "/api/v1/health"


def build_exporter(exporter_type: str, otlp_endpoint: str | None = None) -> SpanExporter | None:
    """Return the span exporter for exporter_type, or None for "none".

    Raises:
        ValueError: Unknown exporter type, or "otlp" without an endpoint.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "console":
        return ConsoleSpanExporter()
    if exporter_type == "otlp":
        if not otlp_endpoint:
            raise ValueError("otlp exporter needs an endpoint")
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    raise ValueError(f"Unknown telemetry exporter: {exporter_type!r}")


class TelemetryConfig:
    """Tracer provider plus the instrumentation hooked to it.

    Built by init_telemetry() only when TELEMETRY_ENABLED is set; shutdown()
    flushes pending spans and undoes the logging instrumentation.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None
        self._logging_instrumented = False

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider:
        """Create the tracer provider and attach the configured exporter.

        Args:
            exporter_type: "console", "otlp", or "none" (spans are recorded
                but not exported; processors may be added later).
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://localhost:4317).
            sample_rate: Fraction of root spans sampled, 0.0-1.0.

        Returns:
            The new TracerProvider.
        """
        exporter = build_exporter(exporter_type, otlp_endpoint)
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        provider = TracerProvider(
            resource=resource, sampler=ParentBased(TraceIdRatioBased(sample_rate))
        )
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        self.tracer_provider = provider
        logger.info(
            "Tracing ready: service=%s version=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.service_version,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Open a server span per request (health checks excluded)."""
        if self.tracer_provider is None:
            return
        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=self.tracer_provider, excluded_urls=UNTRACED_URLS
        )

    def instrument_logging(self) -> None:
        """Add otelTraceID/otelSpanID to every log record."""
        if self.tracer_provider is None or self._logging_instrumented:
            return
        LoggingInstrumentor().instrument(
            tracer_provider=self.tracer_provider, set_logging_format=True
        )
        self._logging_instrumented = True

    def shutdown(self) -> None:
        """Flush and close the provider; remove the logging hook."""
        if self._logging_instrumented:
            LoggingInstrumentor().uninstrument()
            self._logging_instrumented = False
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
            self.tracer_provider = None
            logger.info("Telemetry shut down")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the registered telemetry instance, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Register (or clear, with None) the telemetry instance."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry


def get_tracer(name: str) -> trace.Tracer:
    """Tracer from the registered provider; the no-op tracer when there is none."""
    telemetry = get_telemetry()
    if telemetry is not None and telemetry.tracer_provider is not None:
        return telemetry.tracer_provider.get_tracer(name)
    return trace.get_tracer(name)
