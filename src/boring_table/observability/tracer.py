"""
OpenTelemetry tracing of dispatch cycles.

Tracing is local-only: spans go to the global tracer provider and, when
requested, to a JSONL file. Nothing is exported over the network.
"""

import json
import os
from contextlib import AbstractContextManager
from pathlib import Path

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

from .. import __version__

TRACER_NAME = "boring_table"
DEFAULT_TRACES_FILE = Path("~/.cache/boring-table/otel/traces.jsonl")

# Global tracer instance
_tracer: trace.Tracer | None = None
_initialized: bool = False


class FileSpanExporter:
    """
    Simple JSONL file exporter for OpenTelemetry spans.

    100% local - no network calls, no cloud services.
    """

    def __init__(self, file_path: Path) -> None:
        """
        Initialize file exporter.

        Args:
            file_path: Path to JSONL file for traces
        """
        self.file_path = file_path.expanduser()
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def export(self, spans: list) -> None:
        """Export spans to JSONL file."""
        with self.file_path.open("a") as f:
            for span in spans:
                span_dict = {
                    "trace_id": format(span.context.trace_id, "032x"),
                    "span_id": format(span.context.span_id, "016x"),
                    "name": span.name,
                    "start_time": span.start_time,
                    "end_time": span.end_time,
                    "attributes": dict(span.attributes) if span.attributes else {},
                    "status": {
                        "status_code": span.status.status_code.name,
                        "description": span.status.description,
                    },
                }
                f.write(json.dumps(span_dict) + "\n")

    def shutdown(self) -> None:
        """Shutdown exporter."""

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Force flush any pending spans."""
        return True


def init_tracer(
    app_name: str = TRACER_NAME,
    export_to_file: bool = False,
    file_path: Path | None = None,
) -> trace.Tracer:
    """
    Install a TracerProvider and return the package tracer.

    Only the first call configures the provider; later calls return the same
    tracer.

    Args:
        app_name: Service name for traces
        export_to_file: Whether to export spans to a JSONL file
        file_path: Custom file path (default: ~/.cache/boring-table/otel/traces.jsonl)

    Returns:
        Configured OpenTelemetry tracer
    """
    global _tracer, _initialized

    if _initialized:
        return _tracer  # type: ignore[return-value]

    resource = Resource.create(
        {
            "service.name": app_name,
            "service.version": __version__,
            "deployment.environment": os.getenv("ENV", "development"),
        }
    )

    provider = TracerProvider(resource=resource)

    if export_to_file:
        file_exporter = FileSpanExporter(file_path or DEFAULT_TRACES_FILE)
        provider.add_span_processor(SimpleSpanProcessor(file_exporter))  # type: ignore[arg-type]

    # A provider installed earlier by the application keeps the global slot
    trace.set_tracer_provider(provider)

    _tracer = provider.get_tracer(app_name)
    _initialized = True

    return _tracer


def get_tracer() -> trace.Tracer:
    """
    Get the package tracer.

    Before init_tracer() this is whatever the global provider hands out
    (a no-op tracer unless the application configured one).

    Returns:
        OpenTelemetry tracer instance
    """
    if _initialized:
        return _tracer  # type: ignore[return-value]

    return trace.get_tracer(TRACER_NAME)


def dispatch_span(event: str, rows: int, plugins: int) -> AbstractContextManager[trace.Span]:
    """
    Start a span covering one dispatch cycle.

    Args:
        event: Event name
        rows: Number of source records
        plugins: Number of registered plugins

    Returns:
        Context manager yielding the span
    """
    return get_tracer().start_as_current_span(
        "boring_table.dispatch",
        attributes={"table.event": event, "table.rows": rows, "table.plugins": plugins},
    )
