"""
Remote data fetching.

Keeps a set of query parameters, turns them into a query string and hands
it to a user-supplied coroutine. The returned rows replace the table data;
returned extensions are published alongside the plugin's own state.
"""

import asyncio
import copy
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict
from urllib.parse import urlencode

from ..core.events import TableEvent
from ..logging_config import get_logger
from .base import BoringPlugin

logger = get_logger(__name__)


@dataclass
class QueryParam:
    """One query parameter; request_on_change refetches when it is set."""

    value: Any = None
    request_on_change: bool = False


class FetchResult(TypedDict):
    """Value a fetch function resolves to."""

    data: list[Any]
    extensions: NotRequired[dict[str, Any]]


FetchFn = Callable[[str, dict[str, QueryParam]], Awaitable[Mapping[str, Any]]]


def unwrap_value(value: Any, previous: Any) -> Any:
    """Resolve a value or an updater called with the previous value."""
    if callable(value):
        return value(previous)
    return value


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list | tuple):
        return ",".join("" if item is None else _stringify(item) for item in value)
    return str(value)


class FetchPlugin(BoringPlugin):
    """
    Fetch rows from a remote source.

    Example:
        >>> async def load(query_string, params):
        ...     response = await client.get(f"/users?{query_string}")
        ...     return {"data": response.json()["items"]}
        >>> plugin = FetchPlugin(load, {"q": QueryParam("", request_on_change=True)})
    """

    name = "fetch-plugin"

    def __init__(
        self,
        fetch_fn: FetchFn,
        query_params: Mapping[str, QueryParam | Any] | None = None,
        fetch_on_mount: bool = True,
        initial_values: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize fetch plugin.

        Args:
            fetch_fn: Coroutine function (query_string, query_params) -> FetchResult
            query_params: Parameters by name (plain values are wrapped in QueryParam)
            fetch_on_mount: Fetch as soon as the table mounts
            initial_values: Extensions published until the first fetch returns some
        """
        self.fetch_fn = fetch_fn
        self.fetch_on_mount = fetch_on_mount
        self.query_params = self._wrap_params(query_params or {})
        self.initial_query_params = copy.deepcopy(self.query_params)
        self.extensions: dict[str, Any] = dict(initial_values or {})
        self.initial_extensions = copy.deepcopy(self.extensions)

        self.loading = False
        self.error: Exception | None = None
        self.pending: asyncio.Task[None] | None = None

    @staticmethod
    def _wrap_params(params: Mapping[str, QueryParam | Any]) -> dict[str, QueryParam]:
        return {key: param if isinstance(param, QueryParam) else QueryParam(param) for key, param in params.items()}

    def _schedule_fetch(self) -> None:
        """Start fetch() on the running loop, if there is one."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, fetch not scheduled")
            return

        if self.pending is not None and not self.pending.done():
            self.pending.cancel()

        self.pending = loop.create_task(self.fetch())
        self.pending.add_done_callback(self._on_fetch_done)

    @staticmethod
    def _on_fetch_done(task: asyncio.Task[None]) -> None:
        """Collect the outcome of a scheduled fetch so failures are not lost."""
        if task.cancelled():
            logger.debug("Scheduled fetch cancelled")
            return

        error = task.exception()
        if error is not None:
            logger.error(f"Background fetch failed: {error!r}")

    def on_mount(self) -> None:
        if self.fetch_on_mount:
            self._schedule_fetch()

    def on_reset(self) -> None:
        self.query_params = copy.deepcopy(self.initial_query_params)
        self.extensions = copy.deepcopy(self.initial_extensions)
        self._schedule_fetch()

    def get_query_params(self) -> dict[str, Any]:
        """Current parameter values by name."""
        return {key: param.value for key, param in self.query_params.items()}

    def normalize_query_params(self) -> str:
        """
        Build the query string.

        None and empty values are dropped; list values are comma-joined.

        Returns:
            URL-encoded query string
        """
        pairs = []

        for key, value in self.get_query_params().items():
            if value is None:
                continue
            text = _stringify(value)
            if text == "":
                continue
            pairs.append((key, text))

        return urlencode(pairs)

    def set_query_params(self, params: Mapping[str, QueryParam | Any]) -> None:
        """
        Replace all query parameters without fetching.

        Args:
            params: Parameters by name
        """
        self.query_params = self._wrap_params(params)
        self.table.dispatch(TableEvent.UPDATE_EXTENSIONS)

    async def set_query_param(self, key: str, value: Any) -> None:
        """
        Set one parameter, refetching when it requests it.

        Args:
            key: Parameter name
            value: New value, or a callable receiving the previous value

        Raises:
            KeyError: If the parameter is unknown
        """
        param = self.query_params[key]
        param.value = unwrap_value(value, param.value)
        self.table.dispatch(TableEvent.UPDATE_EXTENSIONS)

        if param.request_on_change:
            await self.fetch()

    async def fetch(self) -> None:
        """
        Fetch rows and replace the table data.

        Raises:
            Exception: Whatever fetch_fn raised, after it was published as error
        """
        query_string = self.normalize_query_params()
        self.loading = True
        self.error = None
        self.table.dispatch(TableEvent.UPDATE_EXTENSIONS)

        logger.debug(f"Fetching with query: {query_string!r}")

        try:
            result = await self.fetch_fn(query_string, self.query_params)
        except Exception as e:
            self.loading = False
            self.error = e
            logger.warning(f"Fetch failed: {e}")
            self.table.dispatch(TableEvent.UPDATE_EXTENSIONS)
            raise

        self.loading = False
        if "extensions" in result:
            self.extensions = dict(result["extensions"])
        self.table.set_data(result["data"])

    async def reset_query_params(self) -> None:
        """Restore the initial parameters and refetch."""
        self.query_params = copy.deepcopy(self.initial_query_params)
        await self.fetch()

    async def reset_extensions(self) -> None:
        """Restore the initial extensions and refetch."""
        self.extensions = copy.deepcopy(self.initial_extensions)
        await self.fetch()

    async def reset(self) -> None:
        """Restore parameters and extensions, then refetch."""
        self.query_params = copy.deepcopy(self.initial_query_params)
        self.extensions = copy.deepcopy(self.initial_extensions)
        await self.fetch()

    def on_update_extensions(self, extensions: dict[str, Any]) -> None:
        extensions.update(self.extend())

    def extend(self) -> dict[str, Any]:
        return {
            "query_params": self.get_query_params(),
            "loading": self.loading,
            "error": self.error,
            "fetch": self.fetch,
            "set_query_params": self.set_query_params,
            "set_query_param": self.set_query_param,
            "reset_query_params": self.reset_query_params,
            "reset_extensions": self.reset_extensions,
            "reset": self.reset,
            **self.extensions,
        }
