"""
Column definitions and the body rows derived from them.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Column:
    """
    Projection of a source record into one displayable cell.

    Without an accessor the cell is record[key] for mappings and
    getattr(record, key) for anything else.
    """

    key: str
    header: str | None = None
    accessor: Callable[[Any], Any] | None = None

    @property
    def label(self) -> str:
        """Header text, falling back to the key."""
        return self.header if self.header is not None else self.key

    def cell(self, record: Any) -> Any:
        """
        Project a record into this column's cell value.

        Args:
            record: Source record

        Returns:
            Cell value
        """
        if self.accessor is not None:
            return self.accessor(record)

        if isinstance(record, Mapping):
            return record[self.key]

        return getattr(record, self.key)


@dataclass
class BodyRow:
    """
    Row derived from one source record.

    index addresses the record in table.data; extensions holds the row-level
    fragments plugins contributed through on_create_body_row.
    """

    index: int
    record: Any
    cells: tuple[Any, ...]
    extensions: dict[str, Any] = field(default_factory=dict)


def build_body_row(index: int, record: Any, columns: Sequence[Column]) -> BodyRow:
    """
    Derive a body row from a source record.

    Args:
        index: Position of the record in the data set
        record: Source record
        columns: Column definitions, in display order

    Returns:
        BodyRow with one cell per column
    """
    return BodyRow(index=index, record=record, cells=tuple(column.cell(record) for column in columns))
