"""
boring-table: framework-agnostic, plugin-extensible table engine.
"""

__version__ = "0.1.0"

from .core import BodyRow, BoringTable, Column, Observer, TableEvent, TableState
from .errors import (
    BoringTableError,
    DispatchLoopError,
    ExtensionKeyError,
    InvalidFragmentError,
    PluginRegistrationError,
    UnknownEventError,
)
from .plugins import BoringPlugin, ChangePlugin, FetchPlugin, PaginationPlugin, Priority, QueryParam

__all__ = [
    "BodyRow",
    "BoringPlugin",
    "BoringTable",
    "BoringTableError",
    "ChangePlugin",
    "Column",
    "DispatchLoopError",
    "ExtensionKeyError",
    "FetchPlugin",
    "InvalidFragmentError",
    "Observer",
    "PaginationPlugin",
    "PluginRegistrationError",
    "Priority",
    "QueryParam",
    "TableEvent",
    "TableState",
    "UnknownEventError",
    "__version__",
]
