"""
Event catalog and engine states.
"""

from enum import Enum

from ..errors import UnknownEventError


class TableEvent(str, Enum):
    """Events a table can dispatch."""

    UPDATE_DATA = "update:data"
    UPDATE_CUSTOM_BODY = "update:custom-body"
    UPDATE_EXTENSIONS = "update:extensions"
    RESET = "reset"

    @classmethod
    def resolve(cls, event: "TableEvent | str") -> "TableEvent":
        """
        Convert an event name to a TableEvent.

        Raises:
            UnknownEventError: If the name is not in the catalog
        """
        try:
            return cls(event)
        except ValueError:
            raise UnknownEventError(f"Unknown table event: {event!r}") from None


class TableState(Enum):
    """Lifecycle states of one table."""

    CONSTRUCTING = "constructing"
    CONFIGURING = "configuring"
    BUILDING_BODY = "building_body"
    MOUNTED = "mounted"
    READY = "ready"
    DISPATCHING = "dispatching"
    RESETTING = "resetting"
