"""OpenTelemetry tracing for tool calls and JSON-RPC requests.

Spans are no-ops until :func:`configure_telemetry` installs an SDK tracer
provider (``pip install toolbridge[otel]``).
"""

from __future__ import annotations

import sys

from opentelemetry import trace

ATTR_TOOL_NAME = "toolbridge.tool.name"
ATTR_TOOL_SESSION = "toolbridge.tool.session"
ATTR_TOOL_IS_ERROR = "toolbridge.tool.is_error"
ATTR_RPC_METHOD = "toolbridge.rpc.method"


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


def configure_telemetry(
    *,
    service_name: str = "toolbridge",
    export_to_console: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Install a tracer provider for *service_name*.

    Console spans are written to stderr; stdout carries the protocol stream.

    Raises:
        ImportError: ``opentelemetry-sdk``, or ``opentelemetry-exporter-otlp``
            when *otlp_endpoint* is set, is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for tracing: pip install toolbridge[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        except ImportError as exc:
            msg = "opentelemetry-exporter-otlp is required for OTLP export: pip install toolbridge[otel]"
            raise ImportError(msg) from exc
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))

    trace.set_tracer_provider(provider)
