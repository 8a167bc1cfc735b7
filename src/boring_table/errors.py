"""
Exceptions raised by the table engine and its plugins.
"""


class BoringTableError(Exception):
    """Base class for all boring-table errors."""


class UnknownEventError(BoringTableError, ValueError):
    """Raised when dispatching an event name outside the event catalog."""


class PluginRegistrationError(BoringTableError, ValueError):
    """Raised when two plugins share the same name in one table."""


class InvalidFragmentError(BoringTableError, TypeError):
    """Raised when a hook returns something other than a mapping or None."""


class ExtensionKeyError(BoringTableError):
    """Raised when a plugin contributes a key it did not declare."""

    def __init__(self, plugin_name: str, keys: set[str]) -> None:
        self.plugin_name = plugin_name
        self.keys = keys
        super().__init__(f"Plugin {plugin_name} contributed undeclared extension keys: {sorted(keys)}")


class DispatchLoopError(BoringTableError):
    """Raised when queued dispatch cycles keep chaining past the configured limit."""
