"""
boring-table observability module.

OpenTelemetry tracing of dispatch cycles.
"""

from .tracer import FileSpanExporter, dispatch_span, get_tracer, init_tracer

__all__ = [
    "FileSpanExporter",
    "dispatch_span",
    "get_tracer",
    "init_tracer",
]
