"""
Extension composition.

Every dispatch cycle starts from an empty mapping. Each plugin, in ascending
priority order, contributes the fragments its lifecycle hooks returned during
the cycle and then whatever it writes in on_update_extensions. The merge is
shallow and the last write wins on key collisions.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from ..errors import ExtensionKeyError, InvalidFragmentError
from ..plugins.base import Hook

_MISSING = object()


def validate_fragment(plugin: Any, fragment: Any, check_keys: bool = True) -> Mapping[str, Any] | None:
    """
    Check a fragment returned by a plugin hook.

    Args:
        plugin: Contributing plugin
        fragment: Hook return value
        check_keys: Enforce the plugin's declared extension_keys

    Returns:
        The fragment, or None when the hook returned nothing

    Raises:
        InvalidFragmentError: If the fragment is not a mapping
        ExtensionKeyError: If the fragment carries undeclared keys
    """
    if fragment is None:
        return None

    if not isinstance(fragment, Mapping):
        raise InvalidFragmentError(
            f"Plugin {plugin.name} returned {type(fragment).__name__}, expected a mapping or None"
        )

    if check_keys:
        check_declared_keys(plugin, fragment.keys())

    return fragment


def check_declared_keys(plugin: Any, keys: Iterable[str]) -> None:
    """
    Reject keys a plugin did not declare.

    Plugins without extension_keys are not checked.
    """
    declared = getattr(plugin, "extension_keys", None)
    if declared is None:
        return

    undeclared = set(keys) - set(declared)
    if undeclared:
        raise ExtensionKeyError(plugin.name, undeclared)


class ExtensionComposer:
    """
    Per-cycle fragment collector.

    Fragments recorded during a cycle are merged by build() and dropped by
    clear(); nothing carries over from one cycle to the next.
    """

    def __init__(self, check_keys: bool = True) -> None:
        """
        Initialize composer.

        Args:
            check_keys: Enforce declared extension_keys
        """
        self.check_keys = check_keys
        self._fragments: dict[str, list[Mapping[str, Any]]] = {}

    def record(self, plugin: Any, fragment: Any) -> None:
        """
        Record a fragment returned by one of the plugin's lifecycle hooks.

        Args:
            plugin: Contributing plugin
            fragment: Hook return value (None is ignored)
        """
        fragment = validate_fragment(plugin, fragment, self.check_keys)

        if fragment:
            self._fragments.setdefault(plugin.name, []).append(fragment)

    def build(self, plugins: Iterable[Any]) -> dict[str, Any]:
        """
        Merge this cycle's fragments into a fresh extensions mapping.

        Args:
            plugins: Registered plugins, in priority order

        Returns:
            Composed extensions
        """
        extensions: dict[str, Any] = {}

        for plugin in plugins:
            for fragment in self._fragments.get(plugin.name, ()):
                extensions.update(fragment)

            hook = getattr(plugin, Hook.ON_UPDATE_EXTENSIONS.value, None)
            if not callable(hook):
                continue

            before = dict(extensions)
            hook(extensions)

            if self.check_keys:
                written = [key for key, value in extensions.items() if before.get(key, _MISSING) is not value]
                check_declared_keys(plugin, written)

        return extensions

    def clear(self) -> None:
        """Drop the recorded fragments."""
        self._fragments = {}
