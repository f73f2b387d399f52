"""
Signals
=======

Ordered, synchronous publish/subscribe used for every notification the core
emits. Subscribers run in registration order before emit() returns.
"""

from __future__ import annotations

from typing import Any, Callable, List


class Signal:
    """
    A named notification with an ordered list of subscriber callbacks.

    Subscribers are plain callables taking the emitted arguments. A callback
    registered twice is invoked twice. Exceptions raised by a subscriber
    propagate to the emitter.
    """

    def __init__(self, name: str):
        self._name = name
        self._subscribers: List[Callable[..., Any]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def connect(self, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Register a subscriber. Returns the callback so it can be used as a decorator."""
        self._subscribers.append(callback)
        return callback

    def disconnect(self, callback: Callable[..., Any]) -> bool:
        """Remove the first registration of a subscriber. Returns False if it wasn't connected."""
        try:
            self._subscribers.remove(callback)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._subscribers.clear()

    def emit(self, *args: Any) -> None:
        # Snapshot so subscribers may connect/disconnect while being notified
        for callback in list(self._subscribers):
            callback(*args)

    def __repr__(self) -> str:
        return f"Signal({self._name}, subscribers={len(self._subscribers)})"
