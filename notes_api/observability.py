"""OpenTelemetry and structlog setup for Ocean Notes."""

import logging
import os

import structlog
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

# Service identification
SERVICE_NAME_VALUE = os.getenv("OTEL_SERVICE_NAME", "ocean-notes")
SERVICE_VERSION_VALUE = os.getenv("OTEL_SERVICE_VERSION", "0.1.0")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")


def get_resource() -> Resource:
    """Create OpenTelemetry resource with service attributes."""
    return Resource.create(
        {
            SERVICE_NAME: SERVICE_NAME_VALUE,
            SERVICE_VERSION: SERVICE_VERSION_VALUE,
            "deployment.environment": ENVIRONMENT,
        }
    )


def configure_tracing() -> TracerProvider:
    """Configure OpenTelemetry tracing."""
    provider = TracerProvider(resource=get_resource())
    logger = structlog.get_logger(__name__)

    if os.getenv("OTEL_ENABLE_TRACES", "true").lower() != "true":
        logger.info("tracing_disabled")
        trace.set_tracer_provider(provider)
        return provider

    exporter_type = os.getenv("OTEL_TRACES_EXPORTER", "none")
    span_exporter = None

    if exporter_type == "otlp":
        otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        if otlp_endpoint:
            span_exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
        else:
            logger.warning("otlp_endpoint_missing", signal="traces")
    elif exporter_type == "console":
        span_exporter = ConsoleSpanExporter()

    if span_exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(span_exporter))
        logger.info("tracing_configured", exporter=exporter_type)
    else:
        logger.info("trace_export_disabled", exporter=exporter_type)

    trace.set_tracer_provider(provider)
    return provider


def configure_metrics() -> MeterProvider:
    """Configure OpenTelemetry metrics."""
    logger = structlog.get_logger(__name__)
    metric_readers = []

    if os.getenv("OTEL_ENABLE_METRICS", "true").lower() == "true":
        exporter_type = os.getenv("OTEL_METRICS_EXPORTER", "none")
        metric_exporter = None

        if exporter_type == "otlp":
            otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
            if otlp_endpoint:
                metric_exporter = OTLPMetricExporter(endpoint=otlp_endpoint)
            else:
                logger.warning("otlp_endpoint_missing", signal="metrics")
        elif exporter_type == "console":
            metric_exporter = ConsoleMetricExporter()

        if metric_exporter is not None:
            reader = PeriodicExportingMetricReader(
                metric_exporter,
                export_interval_millis=int(os.getenv("OTEL_METRIC_EXPORT_INTERVAL", "60000")),
            )
            metric_readers.append(reader)
            logger.info("metrics_configured", exporter=exporter_type)
        else:
            logger.info("metric_export_disabled", exporter=exporter_type)
    else:
        logger.info("metrics_disabled")

    provider = MeterProvider(resource=get_resource(), metric_readers=metric_readers)
    metrics.set_meter_provider(provider)

    return provider


def add_otel_context(logger, method_name, event_dict):
    """Add OpenTelemetry trace context to log events."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def configure_logging():
    """Configure structlog with OpenTelemetry integration."""
    log_level = os.getenv("OTEL_LOG_LEVEL", "INFO").upper()
    log_format = os.getenv("LOG_FORMAT", "console").lower()  # json or console

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level),
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_otel_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.ExceptionRenderer(),
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger()
    logger.info("logging_configured", log_level=log_level, log_format=log_format)


def initialize_observability():
    """Initialize logging, tracing and metrics."""
    configure_logging()

    logger = structlog.get_logger()
    logger.info("initializing_observability")

    tracer_provider = configure_tracing()
    meter_provider = configure_metrics()

    logger.info(
        "observability_initialized",
        service_name=SERVICE_NAME_VALUE,
        service_version=SERVICE_VERSION_VALUE,
        environment=ENVIRONMENT,
    )

    return tracer_provider, meter_provider


def get_tracer(name: str = __name__) -> trace.Tracer:
    """Get a tracer instance for creating spans."""
    return trace.get_tracer(name, SERVICE_VERSION_VALUE)


def get_meter(name: str = __name__) -> metrics.Meter:
    """Get a meter instance for creating metrics."""
    return metrics.get_meter(name, SERVICE_VERSION_VALUE)


class AppMetrics:
    """Application-specific metrics."""

    def __init__(self):
        meter = get_meter("ocean_notes.metrics")

        # Counters
        self.notes_created = meter.create_counter(
            name="notes.created", description="Notes created", unit="1"
        )

        self.notes_updated = meter.create_counter(
            name="notes.updated", description="Note updates applied", unit="1"
        )

        self.notes_deleted = meter.create_counter(
            name="notes.deleted", description="Notes deleted", unit="1"
        )

        self.store_seeded = meter.create_counter(
            name="store.seeded",
            description="Times the store was seeded with example notes",
            unit="1",
        )

        # Histograms
        self.render_duration = meter.create_histogram(
            name="markdown.render.duration",
            description="Markdown preview rendering duration in milliseconds",
            unit="ms",
        )


# Global metrics instance
app_metrics: AppMetrics | None = None


def get_app_metrics() -> AppMetrics:
    """Get the global application metrics instance."""
    global app_metrics
    if app_metrics is None:
        app_metrics = AppMetrics()
    return app_metrics
