"""Observable value holder for publishing state to consumers.

Observable is the channel through which the current locale, the loading
flag and the merged dictionaries reach subscribers. Subscribers receive
the current value immediately on subscription and every distinct value
afterwards.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

__all__ = ["Observable"]

logger = logging.getLogger(__name__)


class Observable[T]:
    """Single value with change notification.

    Setting a value equal to the current one does not notify. A subscriber
    that raises is logged and does not prevent the remaining subscribers
    from being called.

    Example:
        >>> locale = Observable[str | None](None)
        >>> unsubscribe = locale.subscribe(print)
        None
        >>> locale.set("en")
        en
        >>> unsubscribe()
    """

    __slots__ = ("_name", "_subscribers", "_value")

    def __init__(self, value: T, *, name: str = "observable") -> None:
        """Initialize with a starting value.

        Args:
            value: Initial value
            name: Label used in log records
        """
        self._value = value
        self._name = name
        self._subscribers: list[Callable[[T], object]] = []

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Observable({self._name}={self._value!r}, subscribers={len(self._subscribers)})"

    def get(self) -> T:
        """Get the current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify subscribers if it changed."""
        if value == self._value:
            return
        self._value = value
        # Copy: subscribers may unsubscribe while being notified
        for callback in list(self._subscribers):
            self._notify(callback, value)

    def update(self, updater: Callable[[T], T]) -> None:
        """Set the value computed from the current one."""
        self.set(updater(self._value))

    def subscribe(self, callback: Callable[[T], object]) -> Callable[[], None]:
        """Register a callback and call it with the current value.

        Args:
            callback: Called with each new value

        Returns:
            Function removing the subscription (safe to call twice)
        """
        self._subscribers.append(callback)
        self._notify(callback, self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, callback: Callable[[T], object], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Subscriber of %s failed", self._name)
