"""
Client-side pagination.

Slices the custom body into pages. Runs last so the slice is taken after
every filtering or sorting plugin has acted.
"""

import math
from collections.abc import Sequence
from typing import Any, ClassVar

from ..core.column import BodyRow
from ..core.events import TableEvent
from ..logging_config import get_logger
from .base import BoringPlugin, Priority

logger = get_logger(__name__)


class PaginationPlugin(BoringPlugin):
    """
    Page through the custom body.

    page_size=0 means a single page holding every row; the size is fixed
    from the row count of the first body build.
    """

    name = "pagination-plugin"
    priority = Priority.SHOULD_BE_LAST
    extension_keys: ClassVar[frozenset[str]] = frozenset(
        {"page", "page_size", "total_items", "last_page", "next_page", "prev_page", "go_to_page"}
    )

    def __init__(self, page: int = 1, page_size: int = 0) -> None:
        """
        Initialize pagination.

        Args:
            page: Initial page (1-based)
            page_size: Rows per page (0: all rows on one page)
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if page_size < 0:
            raise ValueError(f"page_size must be >= 0, got {page_size}")

        self.initial_page = page
        self.page = page
        self.page_size = page_size
        self.last_page = 0
        self.total_items = 0
        self._counted = False

    def next_page(self) -> None:
        """Move to the next page; no-op on the last page."""
        if self.page >= self.last_page:
            return
        self.page += 1
        self.table.dispatch(TableEvent.UPDATE_CUSTOM_BODY)

    def prev_page(self) -> None:
        """Move to the previous page; no-op on the first page."""
        if self.page <= 1:
            return
        self.page -= 1
        self.table.dispatch(TableEvent.UPDATE_CUSTOM_BODY)

    def go_to_page(self, page: int) -> None:
        """
        Jump to a page, clamped into [1, last_page].

        Args:
            page: Target page
        """
        target = max(1, min(page, self.last_page))
        if target == self.page:
            return
        self.page = target
        self.table.dispatch(TableEvent.UPDATE_CUSTOM_BODY)

    def _recount(self, total: int) -> None:
        """Track the row count; a changed count sends the view back to page 1."""
        if self._counted and total != self.total_items:
            logger.debug(f"Row count changed {self.total_items} -> {total}, back to page 1")
            self.page = 1

        self.total_items = total
        self.last_page = math.ceil(total / self.page_size) if self.page_size else 0
        if self.last_page and self.page > self.last_page:
            self.page = self.last_page
        self._counted = True

    def after_create_body_rows(self) -> None:
        if self.page_size == 0:
            self.page_size = len(self.table.custom_body)

    def on_update_custom_body(self, body: Sequence[BodyRow]) -> list[BodyRow]:
        self._recount(len(body))
        start = (self.page - 1) * self.page_size
        return list(body[start : start + self.page_size])

    def on_reset(self) -> None:
        self.page = self.initial_page

    def on_update_extensions(self, extensions: dict[str, Any]) -> None:
        extensions.update(self.extend())

    def extend(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "last_page": self.last_page,
            "next_page": self.next_page,
            "prev_page": self.prev_page,
            "go_to_page": self.go_to_page,
        }
