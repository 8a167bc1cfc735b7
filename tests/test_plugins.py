"""Tests for plugin system."""

import pytest

from boring_table.errors import PluginRegistrationError
from boring_table.plugins.base import BoringPlugin, Hook, Priority, plugin_priority
from boring_table.plugins.manager import PluginManager


class Named:
    """Bare plugin: a name and nothing else."""

    def __init__(self, name, priority=None):
        self.name = name
        if priority is not None:
            self.priority = priority


class Resetting(Named):
    def __init__(self, name, priority=None, log=None):
        super().__init__(name, priority)
        self.log = log if log is not None else []

    def on_reset(self):
        self.log.append(self.name)
        return {"reset_by": self.name}


@pytest.mark.unit
class TestPluginManager:
    """Test plugin manager functionality."""

    def test_manager_initialization(self):
        """Test initializing plugin manager."""
        manager = PluginManager()

        assert manager.plugins == {}
        assert all(plugins == [] for plugins in manager.hooks.values())
        assert set(manager.hooks) == set(Hook)

    def test_register_plugin(self):
        """Test registering plugins at construction."""
        plugin = Named("test-plugin")

        manager = PluginManager([plugin])

        assert "test-plugin" in manager.plugins
        assert manager.plugins["test-plugin"] is plugin
        assert len(manager) == 1

    def test_duplicate_name_rejected(self):
        """Test two plugins with one name are rejected."""
        with pytest.raises(PluginRegistrationError, match="already registered"):
            PluginManager([Named("dup"), Named("dup")])

    def test_nameless_plugin_rejected(self):
        """Test objects without a string name are not plugins."""
        with pytest.raises(PluginRegistrationError):
            PluginManager([object()])

    def test_get_plugin(self):
        """Test getting plugin by name."""
        manager = PluginManager([Named("my-plugin")])

        retrieved = manager.get_plugin("my-plugin")

        assert retrieved is not None
        assert retrieved.name == "my-plugin"
        assert manager.get_plugin("missing") is None

    def test_list_plugins_in_priority_order(self):
        """Test listing orders by priority, ties by registration."""
        late = Named("late", Priority.SHOULD_BE_LAST)
        a = Named("a")
        early = Named("early", Priority.SHOULD_BE_FIRST)
        b = Named("b", Priority.NORMAL)

        manager = PluginManager([late, a, early, b])

        assert [p.name for p in manager.list_plugins()] == ["early", "a", "b", "late"]

    def test_missing_priority_defaults_to_normal(self):
        """Test plugins without a priority attribute count as NORMAL."""
        assert plugin_priority(Named("x")) == Priority.NORMAL
        assert plugin_priority(Named("y", 5)) == 5

    def test_hooks_resolve_only_implementers(self):
        """Test a hook lists exactly the plugins implementing it."""
        bare = Named("bare")
        resetting = Resetting("resetting")

        manager = PluginManager([bare, resetting])

        assert manager.list_plugins(Hook.ON_RESET) == [resetting]
        assert manager.list_plugins(Hook.ON_MOUNT) == []

    def test_implementers_in_priority_order(self):
        """Test bound hooks come back in priority order."""
        log = []
        second = Resetting("second", 10, log)
        first = Resetting("first", -10, log)

        manager = PluginManager([second, first])
        pairs = manager.implementers(Hook.ON_RESET)

        assert [plugin for plugin, _ in pairs] == [first, second]
        assert [callback() for _, callback in pairs] == [{"reset_by": "first"}, {"reset_by": "second"}]
        assert log == ["first", "second"]

    def test_get_stats(self):
        """Test getting plugin statistics."""
        manager = PluginManager([Named("p1"), Resetting("p2", Priority.SHOULD_BE_FIRST)])

        stats = manager.get_stats()

        assert stats["total_plugins"] == 2
        assert stats["by_hook"]["on_reset"] == 1
        assert stats["by_hook"]["configure"] == 0
        assert stats["order"] == ["p2", "p1"]


@pytest.mark.unit
class TestBoringPlugin:
    """Test the convenience base class."""

    def test_default_name_and_priority(self):
        """Test defaults come from the class."""

        class Sorting(BoringPlugin):
            pass

        plugin = Sorting()

        assert plugin.name == "Sorting"
        assert plugin.priority == Priority.NORMAL
        assert plugin.extend() == {}

    def test_table_before_configure(self):
        """Test using the back-reference before configure is an error."""
        plugin = BoringPlugin()

        with pytest.raises(RuntimeError, match="before configure"):
            _ = plugin.table

    def test_configure_binds_table(self):
        """Test configure stores the table."""
        plugin = BoringPlugin()
        table = object()

        assert plugin.configure(table) is None
        assert plugin.table is table

    def test_priority_sentinels(self):
        """Test the sentinel ordering."""
        assert Priority.SHOULD_BE_FIRST < Priority.NORMAL < Priority.SHOULD_BE_LAST
