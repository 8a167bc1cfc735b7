"""
Table engine core: observer, columns, extension composition and the engine.
"""

from .observer import Observer
from .column import BodyRow, Column, build_body_row
from .events import TableEvent, TableState
from .extensions import ExtensionComposer, validate_fragment
from .table import BoringTable

__all__ = [
    "BodyRow",
    "BoringTable",
    "Column",
    "ExtensionComposer",
    "Observer",
    "TableEvent",
    "TableState",
    "build_body_row",
    "validate_fragment",
]
