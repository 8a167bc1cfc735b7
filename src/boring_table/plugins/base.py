"""
Plugin capability interface.

A plugin is any object with a name and a priority that implements zero or
more of the optional lifecycle hooks listed in Hook. Hooks that a plugin
does not expose are skipped.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from ..core.table import BoringTable


class Priority(IntEnum):
    """
    Base priorities.

    Hooks of the same name run in ascending priority, so SHOULD_BE_LAST runs
    after every normally prioritized plugin.
    """

    SHOULD_BE_FIRST = -1000
    NORMAL = 0
    SHOULD_BE_LAST = 1000


class Hook(Enum):
    """
    Lifecycle hooks, in the order they run within one plugin.

    configure(table) -> fragment | None
    on_create_body_row(row) -> row fragment | None
    after_create_body_rows() -> fragment | None
    on_mount() -> None
    on_reset() -> fragment | None
    on_update_custom_body(body) -> new body | None (keep)
    on_update_extensions(extensions) -> None (writes into extensions)
    """

    CONFIGURE = "configure"
    ON_CREATE_BODY_ROW = "on_create_body_row"
    AFTER_CREATE_BODY_ROWS = "after_create_body_rows"
    ON_MOUNT = "on_mount"
    ON_RESET = "on_reset"
    ON_UPDATE_CUSTOM_BODY = "on_update_custom_body"
    ON_UPDATE_EXTENSIONS = "on_update_extensions"


class BoringPlugin:
    """
    Convenience base class for plugins.

    Subclasses set name and priority as class attributes and override the
    hooks they need. configure() binds the table back-reference.

    Example:
        >>> class Totals(BoringPlugin):
        ...     name = "totals"
        ...     def extend(self):
        ...         return {"rows": len(self.table.body)}
        ...     def on_update_extensions(self, extensions):
        ...         extensions.update(self.extend())
    """

    priority: int = Priority.NORMAL

    # Keys this plugin may contribute; None disables the check
    extension_keys: ClassVar[frozenset[str] | None] = None

    _table: BoringTable | None = None

    @property
    def name(self) -> str:
        """Plugin name (class name unless overridden)."""
        return type(self).__name__

    @property
    def table(self) -> BoringTable:
        """Table this plugin was configured with."""
        if self._table is None:
            raise RuntimeError(f"Plugin {self.name} used before configure()")
        return self._table

    @table.setter
    def table(self, table: BoringTable) -> None:
        self._table = table

    def configure(self, table: BoringTable) -> Mapping[str, Any] | None:
        """Bind the table back-reference."""
        self.table = table
        return None

    def extend(self) -> dict[str, Any]:
        """Fragment this plugin publishes into the table extensions."""
        return {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} priority={self.priority}>"


def plugin_priority(plugin: Any) -> int:
    """Priority of any plugin object, NORMAL when it declares none."""
    return getattr(plugin, "priority", Priority.NORMAL)
