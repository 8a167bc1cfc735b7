"""
Minimal change-notification primitive.
"""

from collections.abc import Callable
from itertools import count

Listener = Callable[[], object]
Disposer = Callable[[], None]


class Observer:
    """
    Payload-less listener registry.

    Listeners run synchronously, in subscription order, on notify().
    Exceptions raised by a listener propagate to the caller of notify().
    """

    def __init__(self) -> None:
        """Initialize observer."""
        self._listeners: dict[int, Listener] = {}
        self._ids = count()

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Disposer:
        """
        Subscribe a listener.

        Args:
            listener: Callable invoked with no arguments on every notify()

        Returns:
            Disposer removing exactly this registration; extra calls are no-ops
        """
        key = next(self._ids)
        self._listeners[key] = listener

        def dispose() -> None:
            self._listeners.pop(key, None)

        return dispose

    def notify(self) -> None:
        """Invoke every currently subscribed listener."""
        for key, listener in list(self._listeners.items()):
            # Skip listeners disposed earlier in this pass
            if key in self._listeners:
                listener()
