"""OpenTelemetry bootstrap -- tracing initialisation and span names.

Configures a ``TracerProvider`` with an OTLP HTTP exporter when tracing is
enabled via ``TracingConfig``.  When disabled the module is a no-op and
``tracer`` hands out non-recording spans.

Auto-instrumentations wired here:

- **FastAPI** (inbound HTTP spans)
- **httpx** (outbound HTTP spans -- covers both the storefront search and
  the OpenAI SDK, which runs on httpx)

Usage::

    from shopal.infra.telemetry import SPAN_CATALOG_SEARCH, tracer

    with tracer.start_as_current_span(SPAN_CATALOG_SEARCH) as span:
        ...
"""

from __future__ import annotations

import base64
import logging

from opentelemetry import trace

from shopal.configs.system import TracingConfig

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("shopal")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_CHAT_PIPELINE = "chat.pipeline"
SPAN_CATALOG_SEARCH = "catalog.search"
SPAN_COMPLETION_INVOKE = "completion.invoke"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_CHAT_PARSING_MODE = "chat.parsing_mode"
ATTR_CHAT_ERROR_CATEGORY = "chat.error_category"

ATTR_CATALOG_QUERY_LEN = "catalog.query_len"
ATTR_CATALOG_RESULT_COUNT = "catalog.result_count"
ATTR_CATALOG_SHAPE_RECOGNIZED = "catalog.shape_recognized"

ATTR_COMPLETION_MODEL = "completion.model"
ATTR_COMPLETION_MESSAGE_COUNT = "completion.message_count"
ATTR_COMPLETION_STATUS_CODE = "completion.status_code"
ATTR_COMPLETION_FALLBACK = "completion.fallback"


def init_telemetry(
    app: object | None = None,
    settings: TracingConfig | None = None,
) -> bool:
    """Initialise the OTEL ``TracerProvider`` and auto-instrumentations.

    Returns ``True`` when tracing was switched on.
    """
    if settings is None or not settings.enabled:
        logger.info("OpenTelemetry tracing disabled.")
        return False

    if not settings.endpoint or not settings.username or not settings.password:
        logger.warning(
            "Tracing enabled but endpoint/credentials not configured, "
            "skipping OpenTelemetry setup."
        )
        return False

    from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
        OTLPSpanExporter,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
    from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

    resource = Resource.create({"service.name": settings.service_name})
    sampler = ParentBased(root=TraceIdRatioBased(settings.sample_rate))
    provider = TracerProvider(resource=resource, sampler=sampler)

    credentials = f"{settings.username}:{settings.password}"
    encoded = base64.b64encode(credentials.encode()).decode()
    exporter = OTLPSpanExporter(
        endpoint=settings.endpoint,
        headers={"Authorization": f"Basic {encoded}"},
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    if app is not None:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor.instrument_app(app)

    from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

    HTTPXClientInstrumentor().instrument()

    logger.info(
        "OpenTelemetry tracing initialised (service=%s).", settings.service_name
    )
    return True
