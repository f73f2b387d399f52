"""
Tests for the synchronous signal primitive.
"""

import pytest

from syncseed.rhythm_core.signals import Signal


class TestSignal:

    def test_emit_in_registration_order(self):
        signal = Signal("changed")
        order = []
        signal.connect(lambda value: order.append(("a", value)))
        signal.connect(lambda value: order.append(("b", value)))

        signal.emit(3)

        assert order == [("a", 3), ("b", 3)]

    def test_connect_as_decorator(self):
        signal = Signal("changed")

        @signal.connect
        def handler():
            pass

        assert handler is not None
        assert signal.subscriber_count == 1

    def test_disconnect(self):
        signal = Signal("changed")
        calls = []
        signal.connect(calls.append)

        assert signal.disconnect(calls.append)
        assert not signal.disconnect(calls.append)

        signal.emit(1)
        assert calls == []

    def test_disconnect_during_emit(self):
        """Subscribers removed mid-emit still receive the current emission."""
        signal = Signal("changed")
        calls = []

        def first():
            calls.append("first")
            signal.disconnect(second)

        def second():
            calls.append("second")

        signal.connect(first)
        signal.connect(second)

        signal.emit()
        signal.emit()

        assert calls == ["first", "second", "first"]

    def test_subscriber_exception_propagates(self):
        signal = Signal("changed")

        def fail():
            raise RuntimeError("boom")

        signal.connect(fail)

        with pytest.raises(RuntimeError):
            signal.emit()

    def test_clear(self):
        signal = Signal("changed")
        signal.connect(print)
        signal.clear()

        assert signal.subscriber_count == 0
        assert signal.name == "changed"
