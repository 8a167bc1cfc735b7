"""
Plugin registry and hook dispatch for one table.

Plugins are registered once, at table construction, and hook implementers are
resolved per hook name in ascending priority order (ties keep registration
order).
"""

from collections.abc import Callable, Iterable
from typing import Any

from ..errors import PluginRegistrationError
from ..logging_config import get_logger
from .base import Hook, plugin_priority

logger = get_logger(__name__)


class PluginManager:
    """
    Ordered plugin registry.

    Handles plugin registration, priority ordering and hook resolution.
    """

    def __init__(self, plugins: Iterable[Any] = ()) -> None:
        """
        Initialize plugin manager.

        Args:
            plugins: Plugin instances, in registration order
        """
        self.plugins: dict[str, Any] = {}
        self.hooks: dict[Hook, list[Any]] = {}

        for plugin in plugins:
            self.register_plugin(plugin)

        self._resolve_hooks()

        logger.debug(f"PluginManager initialized with {len(self.plugins)} plugins")

    def register_plugin(self, plugin: Any) -> None:
        """
        Register a plugin.

        Args:
            plugin: Plugin to register

        Raises:
            PluginRegistrationError: If the plugin has no name or the name is taken
        """
        if not isinstance(getattr(plugin, "name", None), str):
            raise PluginRegistrationError(f"{plugin!r} is not a plugin: a string name is required")

        if plugin.name in self.plugins:
            raise PluginRegistrationError(f"Plugin {plugin.name} already registered")

        self.plugins[plugin.name] = plugin
        logger.info(f"Registered plugin: {plugin.name} (priority {plugin_priority(plugin)})")

    def _resolve_hooks(self) -> None:
        """Build the per-hook implementer lists."""
        # sorted() is stable, so equal priorities keep registration order
        ordered = sorted(self.plugins.values(), key=plugin_priority)

        self.hooks = {
            hook: [plugin for plugin in ordered if callable(getattr(plugin, hook.value, None))] for hook in Hook
        }

    def get_plugin(self, name: str) -> Any | None:
        """
        Get plugin by name.

        Args:
            name: Plugin name

        Returns:
            Plugin or None
        """
        return self.plugins.get(name)

    def list_plugins(self, hook: Hook | None = None) -> list[Any]:
        """
        List plugins in priority order.

        Args:
            hook: Only list plugins implementing this hook

        Returns:
            List of plugins
        """
        if hook is not None:
            return list(self.hooks[hook])

        return sorted(self.plugins.values(), key=plugin_priority)

    def implementers(self, hook: Hook) -> list[tuple[Any, Callable[..., Any]]]:
        """
        Get bound hook callables in invocation order.

        Args:
            hook: Hook to resolve

        Returns:
            List of (plugin, bound hook) pairs
        """
        return [(plugin, getattr(plugin, hook.value)) for plugin in self.hooks[hook]]

    def get_stats(self) -> dict[str, Any]:
        """
        Get plugin statistics.

        Returns:
            Dict with plugin stats
        """
        return {
            "total_plugins": len(self.plugins),
            "by_hook": {hook.value: len(plugins) for hook, plugins in self.hooks.items()},
            "order": [plugin.name for plugin in self.list_plugins()],
        }

    def __len__(self) -> int:
        return len(self.plugins)
