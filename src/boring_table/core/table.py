"""
Table engine.

Owns the data set, derives body rows and the custom body, dispatches
lifecycle events to plugins in priority order, composes the extensions
mapping and notifies subscribers once per dispatch cycle.
"""

import asyncio
from collections import deque
from collections.abc import Callable, Iterable
from contextlib import AbstractContextManager, nullcontext
from typing import Any

from ..config import BoringTableSettings, get_settings
from ..errors import DispatchLoopError
from ..logging_config import get_logger
from ..observability.tracer import dispatch_span, init_tracer
from ..plugins.base import Hook
from ..plugins.manager import PluginManager
from .column import BodyRow, Column, build_body_row
from .events import TableEvent, TableState
from .extensions import ExtensionComposer, validate_fragment
from .observer import Disposer, Observer

logger = get_logger(__name__)


class BoringTable:
    """
    Plugin-driven table engine.

    Construction runs configure, body derivation, the custom-body pipeline
    and on_mount, then publishes the first extensions. Every later state
    change goes through dispatch(), which runs exactly one cycle at a time:
    a dispatch issued while a cycle is running is queued and run after it.

    Example:
        >>> table = BoringTable(rows, [Column("name")], [PaginationPlugin(page_size=10)])
        >>> table.extensions["last_page"]
        >>> table.extensions["next_page"]()
        >>> [row.cells for row in table.custom_body]
    """

    def __init__(
        self,
        data: Iterable[Any] = (),
        columns: Iterable[Column] = (),
        plugins: Iterable[Any] = (),
        settings: BoringTableSettings | None = None,
    ) -> None:
        """
        Initialize table.

        Args:
            data: Source records
            columns: Column definitions, in display order
            plugins: Plugin instances, in registration order
            settings: Settings override (defaults to the global settings)
        """
        self.state = TableState.CONSTRUCTING
        self.settings = settings or get_settings()

        self.data: list[Any] = list(data)
        self.columns: tuple[Column, ...] = tuple(columns)
        self.body: list[BodyRow] = []
        self.custom_body: list[BodyRow] = []
        self.extensions: dict[str, Any] = {}

        self.observer = Observer()
        self.plugins = PluginManager(plugins)

        self._composer = ExtensionComposer(check_keys=self.settings.engine.check_extension_keys)
        self._pending: deque[TableEvent] = deque()

        if self.settings.tracing.enabled:
            init_tracer(
                export_to_file=self.settings.tracing.export_to_file,
                file_path=self.settings.tracing.traces_file,
            )

        self._construct()

        logger.info(f"Table ready: {len(self.data)} rows, {len(self.columns)} columns, {len(self.plugins)} plugins")

        self._drain()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def set_data(self, data: Iterable[Any]) -> None:
        """
        Replace the data set and dispatch update:data.

        Args:
            data: New source records
        """
        self.data = list(data)
        self.dispatch(TableEvent.UPDATE_DATA)

    def dispatch(self, event: TableEvent | str) -> None:
        """
        Run one dispatch cycle for an event.

        The cycle runs the hooks mapped to the event, rebuilds extensions
        and notifies subscribers. Called during another cycle, the event is
        queued and runs after that cycle completes.

        Args:
            event: Event or event name

        Raises:
            UnknownEventError: If the event is not in the catalog
            DispatchLoopError: If queued cycles keep chaining past the limit
        """
        event = TableEvent.resolve(event)
        self._pending.append(event)

        if self.state is not TableState.READY:
            logger.debug(f"Queued {event.value} while {self.state.value}")
            return

        self._drain()

    def reset(self) -> None:
        """Dispatch the reset event."""
        self.dispatch(TableEvent.RESET)

    def subscribe(self, listener: Callable[[], object]) -> Disposer:
        """
        Subscribe to end-of-cycle notifications.

        Args:
            listener: Callable invoked with no arguments after each cycle

        Returns:
            Disposer removing the listener
        """
        return self.observer.subscribe(listener)

    def wait_for_updates(self) -> asyncio.Future[None]:
        """
        Get a future resolved by the next completed dispatch cycle.

        The subscription is made immediately and removed when it fires.
        There is no timeout; wrap it in asyncio.wait_for() if one is needed.
        Must be called with a running event loop.

        Returns:
            Future resolved after the next cycle's notification
        """
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def on_update() -> None:
            dispose()
            if not future.done():
                future.set_result(None)

        dispose = self.observer.subscribe(on_update)

        return future

    def get_plugin(self, name: str) -> Any | None:
        """
        Get a registered plugin by name.

        Args:
            name: Plugin name

        Returns:
            Plugin or None
        """
        return self.plugins.get_plugin(name)

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    def _construct(self) -> None:
        """Configure plugins, build the first body, mount and publish."""
        with self._span("construct"):
            self.state = TableState.CONFIGURING
            for plugin, configure in self.plugins.implementers(Hook.CONFIGURE):
                self._composer.record(plugin, self._call_hook(Hook.CONFIGURE, plugin, configure, self))

            self.state = TableState.BUILDING_BODY
            self._build_body()

            self.state = TableState.MOUNTED
            for plugin, on_mount in self.plugins.implementers(Hook.ON_MOUNT):
                self._call_hook(Hook.ON_MOUNT, plugin, on_mount)

            self._publish()
            self.observer.notify()

        self.state = TableState.READY

    def _drain(self) -> None:
        """Run queued cycles one after another."""
        limit = self.settings.engine.max_chained_dispatches
        completed = 0

        while self._pending:
            if completed > limit:
                queued = [event.value for event in self._pending]
                self._pending.clear()
                raise DispatchLoopError(f"Dispatch chain exceeded {limit} queued cycles (pending: {queued})")

            self._run_cycle(self._pending.popleft())
            completed += 1

    def _run_cycle(self, event: TableEvent) -> None:
        """Run the hook pass for one event, then publish and notify."""
        self.state = TableState.RESETTING if event is TableEvent.RESET else TableState.DISPATCHING
        logger.debug(f"Dispatch cycle: {event.value}")
        self._composer.clear()

        try:
            with self._span(event.value):
                if event is TableEvent.UPDATE_DATA:
                    self._build_body()
                elif event is TableEvent.UPDATE_CUSTOM_BODY:
                    self._update_custom_body()
                elif event is TableEvent.RESET:
                    for plugin, on_reset in self.plugins.implementers(Hook.ON_RESET):
                        self._composer.record(plugin, self._call_hook(Hook.ON_RESET, plugin, on_reset))
                    self._update_custom_body()

                self._publish()
                self.observer.notify()
        except Exception:
            # No rollback: state already changed by earlier hooks stays as is
            self._pending.clear()
            raise
        finally:
            self.state = TableState.READY

    def _build_body(self) -> None:
        """Derive body rows from data, then refresh the custom body."""
        self.body = [build_body_row(index, record, self.columns) for index, record in enumerate(self.data)]

        row_hooks = self.plugins.implementers(Hook.ON_CREATE_BODY_ROW)
        check_keys = self.settings.engine.check_extension_keys
        for row in self.body:
            for plugin, on_create_body_row in row_hooks:
                fragment = self._call_hook(Hook.ON_CREATE_BODY_ROW, plugin, on_create_body_row, row)
                fragment = validate_fragment(plugin, fragment, check_keys)
                if fragment:
                    row.extensions.update(fragment)

        self.custom_body = list(self.body)

        for plugin, after_create_body_rows in self.plugins.implementers(Hook.AFTER_CREATE_BODY_ROWS):
            self._composer.record(
                plugin, self._call_hook(Hook.AFTER_CREATE_BODY_ROWS, plugin, after_create_body_rows)
            )

        self._update_custom_body()

    def _update_custom_body(self) -> None:
        """Reset the custom body from body and thread it through the pipeline."""
        self.custom_body = list(self.body)

        for plugin, on_update_custom_body in self.plugins.implementers(Hook.ON_UPDATE_CUSTOM_BODY):
            result = self._call_hook(Hook.ON_UPDATE_CUSTOM_BODY, plugin, on_update_custom_body, self.custom_body)
            if result is not None:
                self.custom_body = list(result)

    def _publish(self) -> None:
        """Replace extensions with this cycle's composition."""
        try:
            extensions = self._composer.build(self.plugins.list_plugins())
        except Exception:
            logger.exception(f"Failed to compose extensions while {self.state.value}")
            raise
        finally:
            self._composer.clear()

        self.extensions = extensions

    def _call_hook(self, hook: Hook, plugin: Any, callback: Callable[..., Any], *args: Any) -> Any:
        """Invoke one plugin hook, logging failures before re-raising."""
        try:
            return callback(*args)
        except Exception:
            logger.exception(f"Plugin {plugin.name} failed in {hook.value} while {self.state.value}")
            raise

    def _span(self, event: str) -> AbstractContextManager[Any]:
        """Tracing span for a cycle, or a no-op when tracing is disabled."""
        if not self.settings.tracing.enabled:
            return nullcontext()

        return dispatch_span(event, rows=len(self.data), plugins=len(self.plugins))

    def __repr__(self) -> str:
        return (
            f"<BoringTable state={self.state.value} rows={len(self.data)} "
            f"custom_body={len(self.custom_body)} plugins={self.plugins.get_stats()['order']}>"
        )
