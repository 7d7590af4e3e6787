"""Locale switch state machine.

Turns a locale change request into a committed current locale:

    IDLE -> RESOLVING -> FLUSHING -> COMMITTED -> IDLE
                     \\-----------> COMMITTED (nothing to load)

The winner is the first locale of the fallback chain that has pending
loaders or an existing dictionary. When no candidate qualifies the current
locale becomes None; that is a normal outcome, not an error.

Overlapping requests are not queued. Each one commits when its own flush
completes, so a request whose flush finishes last wins even if it was
issued first.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from lazylocale.enums import SwitchState
from lazylocale.loading.types import LocaleCode
from lazylocale.runtime.observable import Observable

if TYPE_CHECKING:
    from lazylocale.loading.dictionary import DictionaryStore
    from lazylocale.loading.queue import LoaderQueue
    from lazylocale.runtime.loading_signal import LoadingSignal

__all__ = ["LocaleSwitchController"]

logger = logging.getLogger(__name__)


class LocaleSwitchController:
    """Resolves, loads and commits locale change requests.

    The controller owns the current locale observable; nothing else writes
    it except commit(), which init() uses to publish a startup locale.

    Example:
        >>> controller = LocaleSwitchController(queue, store, signal, resolve)
        >>> await controller.set_locale(["it", "es-AR"])
        'es'
        >>> controller.locale.get()
        'es'
    """

    __slots__ = (
        "_generation",
        "_in_flight",
        "_locale",
        "_queue",
        "_resolve",
        "_signal",
        "_state",
        "_store",
    )

    def __init__(
        self,
        queue: LoaderQueue,
        store: DictionaryStore,
        signal: LoadingSignal,
        resolve: Callable[[LocaleCode | Iterable[LocaleCode], LocaleCode | None], list[LocaleCode]],
    ) -> None:
        """Initialize the controller.

        Args:
            queue: Loader queue used to flush the winning locale
            store: Dictionary store consulted for already loaded locales
            signal: Loading flag raised around flushes
            resolve: Fallback chain builder taking (locales, fallback)
        """
        self._queue = queue
        self._store = store
        self._signal = signal
        self._resolve = resolve
        self._locale: Observable[LocaleCode | None] = Observable(None, name="locale")
        self._state = SwitchState.IDLE
        self._in_flight = 0
        self._generation = 0

    @property
    def locale(self) -> Observable[LocaleCode | None]:
        """Observable current locale."""
        return self._locale

    @property
    def state(self) -> SwitchState:
        """FLUSHING while any switch waits on a flush, IDLE otherwise."""
        return self._state

    def is_available(self, locale: LocaleCode) -> bool:
        """Check if the locale has pending or in-flight loaders, or a dictionary."""
        return (
            self._queue.has_queue(locale)
            or self._queue.is_flushing(locale)
            or self._store.has(locale)
        )

    def get_closest_available_locale(
        self,
        locales: LocaleCode | Iterable[LocaleCode],
        fallback: LocaleCode | None = None,
    ) -> LocaleCode | None:
        """Pick the first available locale of the fallback chain.

        Args:
            locales: Requested locale or candidates in preference order
            fallback: Per-call fallback overriding the configured one

        Returns:
            Winning locale, or None if no candidate is available
        """
        for candidate in self._resolve(locales, fallback):
            if self.is_available(candidate):
                return candidate
        return None

    def set_locale(
        self,
        locales: LocaleCode | Iterable[LocaleCode] | None,
        fallback: LocaleCode | None = None,
    ) -> asyncio.Future[LocaleCode | None]:
        """Switch to the closest available locale.

        Resolution, loader bookkeeping and the loading flag are handled
        synchronously; only loader execution is deferred. The returned
        future settles with the committed locale.

        Only the winning locale is flushed. Parents and the fallback locale
        keep their pending loaders, so lookup() falls back to them only
        after wait_locale() has loaded the chain.

        Args:
            locales: Requested locale, candidates in preference order, or
                None to clear the current locale
            fallback: Per-call fallback overriding the configured one

        Returns:
            Future resolving to the committed locale (None if nothing matched)

        Raises:
            RuntimeError: If called without a running event loop
            LoaderError: Through the returned future, if a loader failed
        """
        loop = asyncio.get_running_loop()

        self._transition(SwitchState.RESOLVING)
        winner = None if locales is None else self.get_closest_available_locale(locales, fallback)

        if winner is None or not (self._queue.has_queue(winner) or self._queue.is_flushing(winner)):
            self.commit(winner)
            done: asyncio.Future[LocaleCode | None] = loop.create_future()
            done.set_result(winner)
            return done

        self._transition(SwitchState.FLUSHING)
        self._in_flight += 1
        handle = self._signal.begin(immediate=self._locale.get() is None)
        flush = self._queue.flush(winner)
        return loop.create_task(self._await_flush(winner, flush, handle, self._generation))

    def commit(self, locale: LocaleCode | None) -> None:
        """Publish a locale as current without resolving or loading it."""
        self._transition(SwitchState.COMMITTED)
        if locale != self._locale.get():
            logger.info("Locale changed: %s -> %s", self._locale.get(), locale)
        self._locale.set(locale)
        self._transition(SwitchState.FLUSHING if self._in_flight else SwitchState.IDLE)

    def reset(self) -> None:
        """Clear the current locale and detach switches still in flight.

        Detached switches settle without committing or touching the
        loading flag.
        """
        self._generation += 1
        self._in_flight = 0
        self._transition(SwitchState.IDLE)
        self._locale.set(None)

    async def _await_flush(
        self,
        winner: LocaleCode,
        flush: asyncio.Future[None],
        handle: asyncio.TimerHandle | None,
        generation: int,
    ) -> LocaleCode | None:
        try:
            await flush
        finally:
            if generation == self._generation:
                self._in_flight -= 1
                self._signal.end(handle)
                if not self._in_flight:
                    self._transition(SwitchState.IDLE)
        if generation != self._generation:
            logger.debug("Dropping switch to %s started before reset", winner)
            return None
        self.commit(winner)
        return winner

    def _transition(self, state: SwitchState) -> None:
        if state != self._state:
            logger.debug("Locale switch: %s -> %s", self._state, state)
            self._state = state
