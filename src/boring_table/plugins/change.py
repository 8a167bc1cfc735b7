"""
In-place row editing.

Every body row gets a "change" action that replaces its source record and
resolves once the table has re-rendered.
"""

from __future__ import annotations

import copy
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, ClassVar

from ..core.column import BodyRow
from ..core.events import TableEvent
from ..logging_config import get_logger
from .base import BoringPlugin
from .fetch import unwrap_value

if TYPE_CHECKING:
    from ..core.table import BoringTable

logger = get_logger(__name__)

ChangeAction = Callable[[Any], Awaitable[None]]


class ChangePlugin(BoringPlugin):
    """Edit source records through their body rows."""

    name = "change-plugin"
    extension_keys: ClassVar[frozenset[str]] = frozenset({"change"})

    def __init__(self) -> None:
        """Initialize change plugin."""
        self.initial_data: list[Any] = []

    def configure(self, table: BoringTable) -> None:
        self.table = table
        self.initial_data = copy.deepcopy(table.data)

    def change_data(self, position: int, record: Any) -> None:
        """
        Replace one source record and rebuild the body.

        Args:
            position: Index in table.data
            record: New record
        """
        self.table.data[position] = record
        logger.debug(f"Changed record {position}")
        self.table.dispatch(TableEvent.UPDATE_DATA)

    def change(self, row: BodyRow) -> ChangeAction:
        """
        Build the change action for a row.

        Args:
            row: Body row to edit

        Returns:
            Coroutine function taking a record or an updater (previous -> record)
        """

        async def change_row(record: Any) -> None:
            updated = self.table.wait_for_updates()
            self.change_data(row.index, unwrap_value(record, self.table.data[row.index]))
            await updated

        return change_row

    def on_create_body_row(self, row: BodyRow) -> dict[str, Any]:
        return {"change": self.change(row)}

    def on_reset(self) -> None:
        self.table.set_data(copy.deepcopy(self.initial_data))
