"""
boring-table plugin system.
"""

from .base import BoringPlugin, Hook, Priority, plugin_priority
from .manager import PluginManager
from .pagination import PaginationPlugin
from .fetch import FetchPlugin, FetchResult, QueryParam
from .change import ChangePlugin

__all__ = [
    "BoringPlugin",
    "ChangePlugin",
    "FetchPlugin",
    "FetchResult",
    "Hook",
    "PaginationPlugin",
    "PluginManager",
    "Priority",
    "QueryParam",
    "plugin_priority",
]
