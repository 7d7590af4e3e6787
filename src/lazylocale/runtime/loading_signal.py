"""Debounced loading flag for locale switches.

A locale-to-locale switch only reports loading once its flush has been
running for longer than the configured delay, which keeps fast switches
from flickering a spinner. The very first switch (no current locale yet)
has nothing to show meanwhile and reports loading immediately.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging

from lazylocale.constants import DEFAULT_LOADING_DELAY
from lazylocale.runtime.observable import Observable

__all__ = ["LoadingSignal"]

logger = logging.getLogger(__name__)


class LoadingSignal:
    """Boolean loading state raised around flushes, with debounce.

    Each begin() returns a timer handle that the matching end() cancels.
    The flag drops to False as soon as any active flush settles.

    Example:
        >>> signal = LoadingSignal(delay=0.2)
        >>> handle = signal.begin(immediate=False)
        >>> signal.is_loading
        False
        >>> signal.end(handle)
    """

    __slots__ = ("_delay", "_pending", "_state")

    def __init__(self, delay: float = DEFAULT_LOADING_DELAY) -> None:
        """Initialize the signal.

        Args:
            delay: Seconds a debounced flush may run before the flag is raised
        """
        self._delay = delay
        self._state: Observable[bool] = Observable(False, name="loading")
        self._pending: set[asyncio.TimerHandle] = set()

    @property
    def state(self) -> Observable[bool]:
        """Observable loading flag."""
        return self._state

    @property
    def is_loading(self) -> bool:
        """Current value of the loading flag."""
        return self._state.get()

    @property
    def delay(self) -> float:
        """Debounce threshold in seconds."""
        return self._delay

    @delay.setter
    def delay(self, value: float) -> None:
        self._delay = value

    def begin(self, *, immediate: bool) -> asyncio.TimerHandle | None:
        """Mark the start of a flush.

        Args:
            immediate: Raise the flag now instead of after the delay

        Returns:
            Timer handle to pass to end(), or None if the flag was raised
            immediately

        Raises:
            RuntimeError: If called without a running event loop
        """
        if immediate or self._delay <= 0:
            self._state.set(True)
            return None

        loop = asyncio.get_running_loop()
        handle = loop.call_later(self._delay, self._raise_after_delay)
        self._pending.add(handle)
        return handle

    def end(self, handle: asyncio.TimerHandle | None) -> None:
        """Mark the end of a flush, successful or not."""
        if handle is not None:
            handle.cancel()
            self._pending.discard(handle)
        self._state.set(False)

    def reset(self) -> None:
        """Cancel every pending timer and lower the flag."""
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()
        self._state.set(False)

    def _raise_after_delay(self) -> None:
        logger.debug("Flush exceeded %.3fs loading delay", self._delay)
        self._state.set(True)
