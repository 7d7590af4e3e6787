"""Per-locale loader queue with deduplicated, order-preserving flushes.

A flush takes every pending loader for a locale, runs them concurrently
and merges their dictionaries into the store in registration order once
all of them have settled, so merge conflicts resolve the same way no
matter which loader finishes first.

Deduplication rules:
- Entries are marked consumed synchronously, before the first await, so a
  second flush for the same locale never sees them again.
- A flush with nothing pending hands back the locale's in-flight future
  (if any), so concurrent callers share one underlying result.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from lazylocale.enums import LoadStatus
from lazylocale.errors import LoaderError
from lazylocale.loading.types import Dictionary, LocaleCode

if TYPE_CHECKING:
    from lazylocale.loading.dictionary import DictionaryStore
    from lazylocale.loading.registry import LoaderEntry, LoaderRegistry

__all__ = ["LoaderQueue"]

logger = logging.getLogger(__name__)


class LoaderQueue:
    """Executes pending loaders for a locale and merges their results.

    flush() is a plain method returning a future: all bookkeeping happens
    synchronously at call time and must run inside an event loop.

    Example:
        >>> queue = LoaderQueue(registry, store)
        >>> await queue.flush("en")
        >>> store.get_message("en", "hello")
        'Hello'
    """

    __slots__ = ("_active", "_generation", "_registry", "_store")

    def __init__(self, registry: LoaderRegistry, store: DictionaryStore) -> None:
        """Initialize the queue.

        Args:
            registry: Source of loader entries
            store: Destination of merged dictionaries
        """
        self._registry = registry
        self._store = store
        self._active: dict[LocaleCode, asyncio.Future[None]] = {}
        self._generation = 0

    def has_queue(self, locale: LocaleCode) -> bool:
        """Check if the locale has loaders waiting for a flush."""
        return self._registry.has_queue(locale)

    def is_flushing(self, locale: LocaleCode) -> bool:
        """Check if a flush for the locale is still in flight."""
        return locale in self._active

    def reset(self) -> None:
        """Forget in-flight flushes; their results are no longer merged."""
        self._generation += 1
        self._active.clear()

    def flush(self, locale: LocaleCode) -> asyncio.Future[None]:
        """Run every pending loader for a locale.

        Args:
            locale: Locale code

        Returns:
            Future settling once the locale's pending loaders have been
            merged. Already done when there was nothing to do.

        Raises:
            RuntimeError: If called without a running event loop
            LoaderError: Through the returned future, if a loader failed
        """
        loop = asyncio.get_running_loop()
        entries = self._registry.take_pending(locale)
        previous = self._active.get(locale)

        if not entries:
            if previous is not None:
                return previous
            done: asyncio.Future[None] = loop.create_future()
            done.set_result(None)
            return done

        logger.debug("Flushing %d loader(s) for locale %s", len(entries), locale)
        task = loop.create_task(self._load(locale, entries, previous, self._generation))
        self._active[locale] = task
        task.add_done_callback(lambda finished: self._forget(locale, finished))
        return task

    async def wait(self, locales: Iterable[LocaleCode]) -> None:
        """Flush several locales concurrently and wait for all of them.

        Locales without pending loaders or an in-flight flush are skipped.

        Raises:
            LoaderError: If any locale's flush failed
        """
        flushes = [
            self.flush(locale)
            for locale in locales
            if self._registry.has_queue(locale) or locale in self._active
        ]
        if flushes:
            await asyncio.gather(*flushes)

    def _forget(self, locale: LocaleCode, finished: asyncio.Future[None]) -> None:
        if self._active.get(locale) is finished:
            del self._active[locale]

    async def _load(
        self,
        locale: LocaleCode,
        entries: list[LoaderEntry],
        previous: asyncio.Future[None] | None,
        generation: int,
    ) -> None:
        results = await asyncio.gather(
            *(self._produce(entry) for entry in entries), return_exceptions=True
        )

        partials: list[Dictionary] = []
        failures: list[BaseException] = []
        for entry, result in zip(entries, results, strict=True):
            if isinstance(result, BaseException):
                entry.status = LoadStatus.ERROR
                entry.error = result
                failures.append(result)
                logger.warning(
                    "Loader for locale %s failed: %s: %s", locale, type(result).__name__, result
                )
            elif not isinstance(result, Mapping):
                error = TypeError(
                    f"Loader for locale '{locale}' returned {type(result).__name__}, "
                    "expected a mapping"
                )
                entry.status = LoadStatus.ERROR
                entry.error = error
                failures.append(error)
            else:
                entry.status = LoadStatus.SUCCESS
                partials.append(result)

        if generation != self._generation:
            logger.debug("Discarding flush of locale %s started before reset", locale)
        elif partials:
            self._store.add(locale, *partials)

        # An earlier flush of the same locale must settle first so callers
        # of this flush observe every loader registered before it.
        if previous is not None:
            await asyncio.gather(previous, return_exceptions=True)

        if failures:
            raise LoaderError(locale, tuple(failures)) from failures[0]

    @staticmethod
    async def _produce(entry: LoaderEntry) -> Dictionary:
        result = entry.produce()
        if inspect.isawaitable(result):
            result = await result
        return result
