"""Tests for the observer primitive."""

import pytest

from boring_table.core.observer import Observer


@pytest.mark.unit
class TestObserver:
    """Test subscribe/notify/dispose."""

    def test_notify_without_listeners(self):
        """Test notifying with no listeners is a no-op."""
        observer = Observer()

        observer.notify()

        assert len(observer) == 0

    def test_notify_in_registration_order(self):
        """Test listeners run in the order they subscribed."""
        observer = Observer()
        calls = []

        observer.subscribe(lambda: calls.append("a"))
        observer.subscribe(lambda: calls.append("b"))
        observer.subscribe(lambda: calls.append("c"))

        observer.notify()

        assert calls == ["a", "b", "c"]

    def test_disposer_removes_only_its_listener(self):
        """Test disposing keeps the order of the remaining listeners."""
        observer = Observer()
        calls = []

        observer.subscribe(lambda: calls.append("a"))
        dispose_b = observer.subscribe(lambda: calls.append("b"))
        observer.subscribe(lambda: calls.append("c"))
        observer.subscribe(lambda: calls.append("d"))

        dispose_b()
        observer.notify()

        assert calls == ["a", "c", "d"]

    def test_disposer_is_idempotent(self):
        """Test calling a disposer twice is a no-op."""
        observer = Observer()
        calls = []

        dispose = observer.subscribe(lambda: calls.append("a"))
        observer.subscribe(lambda: calls.append("b"))

        dispose()
        dispose()
        observer.notify()

        assert calls == ["b"]
        assert len(observer) == 1

    def test_same_listener_twice(self):
        """Test each subscription of the same callable is independent."""
        observer = Observer()
        calls = []

        def listener():
            calls.append("x")

        dispose_first = observer.subscribe(listener)
        observer.subscribe(listener)

        observer.notify()
        assert calls == ["x", "x"]

        dispose_first()
        observer.notify()
        assert calls == ["x", "x", "x"]

    def test_listener_disposed_during_pass_is_skipped(self):
        """Test a listener removed by an earlier listener is not called."""
        observer = Observer()
        calls = []
        disposers = {}

        def first():
            calls.append("first")
            disposers["second"]()

        observer.subscribe(first)
        disposers["second"] = observer.subscribe(lambda: calls.append("second"))

        observer.notify()

        assert calls == ["first"]

    def test_listener_added_during_pass_waits_for_next(self):
        """Test a listener subscribed during notify runs from the next pass."""
        observer = Observer()
        calls = []

        def first():
            calls.append("first")
            if len(observer) == 1:
                observer.subscribe(lambda: calls.append("late"))

        observer.subscribe(first)

        observer.notify()
        assert calls == ["first"]

        observer.notify()
        assert calls == ["first", "first", "late"]

    def test_listener_exception_propagates(self):
        """Test listener exceptions reach the caller of notify."""
        observer = Observer()

        def broken():
            raise RuntimeError("boom")

        observer.subscribe(broken)

        with pytest.raises(RuntimeError, match="boom"):
            observer.notify()
