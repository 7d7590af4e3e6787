"""Loader registration and load bookkeeping.

Components:
    LoaderEntry - One registered loader and its consumption state
    LoaderRegistry - Append-only per-locale lists of loader entries
    LoadSummary - Immutable aggregate of entry outcomes for diagnostics

Entries are never removed. Once a flush takes an entry it is consumed for
good; registering the same callable again creates a new, independent entry.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lazylocale.enums import LoadStatus
from lazylocale.loading.types import Loader, LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Registry
    "LoaderEntry",
    "LoaderRegistry",
    # Diagnostics
    "LoadSummary",
]

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class LoaderEntry:
    """A registered dictionary producer for one locale.

    Owned by LoaderRegistry. ``consumed`` flips to True exactly once, when
    a flush takes the entry, and never reverts.

    Attributes:
        locale: Locale the produced dictionary belongs to
        produce: Zero-argument loader, sync or async
        consumed: Whether a flush has taken this entry
        status: Outcome tracking for diagnostics
        error: Exception raised by produce(), if any
    """

    locale: LocaleCode
    produce: Loader
    consumed: bool = False
    status: LoadStatus = LoadStatus.PENDING
    error: BaseException | None = field(default=None, repr=False)

    @property
    def is_pending(self) -> bool:
        """Check if the entry still waits for a flush."""
        return not self.consumed

    @property
    def is_error(self) -> bool:
        """Check if the loader failed."""
        return self.status == LoadStatus.ERROR


class LoaderRegistry:
    """Mapping from locale to its registered loaders, in registration order.

    Marking entries consumed in take_pending() is the only mutual exclusion
    between concurrent flushes; it happens synchronously, before any await.

    Example:
        >>> registry = LoaderRegistry()
        >>> entry = registry.register("en", lambda: {"hello": "Hello"})
        >>> registry.has_queue("en")
        True
        >>> [e.locale for e in registry.take_pending("en")]
        ['en']
        >>> registry.has_queue("en")
        False
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: dict[LocaleCode, list[LoaderEntry]] = {}

    def register(self, locale: LocaleCode, produce: Loader) -> LoaderEntry:
        """Append a new unconsumed loader for a locale.

        Multiple loaders per locale are all kept; each contributes a partial
        dictionary when the locale is flushed.

        Args:
            locale: Locale code the loader produces content for
            produce: Zero-argument callable returning a dictionary or an
                awaitable of one

        Returns:
            The created entry

        Raises:
            TypeError: If produce is not callable
        """
        if not callable(produce):
            msg = f"Loader for locale '{locale}' must be callable, got {type(produce).__name__}"
            raise TypeError(msg)

        entry = LoaderEntry(locale=locale, produce=produce)
        self._entries.setdefault(locale, []).append(entry)
        logger.debug(
            "Registered loader for locale %s (%d total)", locale, len(self._entries[locale])
        )
        return entry

    def has_queue(self, locale: LocaleCode) -> bool:
        """Check if the locale has at least one unconsumed loader."""
        return any(entry.is_pending for entry in self._entries.get(locale, ()))

    def take_pending(self, locale: LocaleCode) -> list[LoaderEntry]:
        """Mark every unconsumed entry for a locale as consumed and return them.

        Args:
            locale: Locale code

        Returns:
            Taken entries in registration order (empty if nothing pending)
        """
        pending = [entry for entry in self._entries.get(locale, ()) if entry.is_pending]
        for entry in pending:
            entry.consumed = True
            entry.status = LoadStatus.LOADING
        return pending

    def entries(self, locale: LocaleCode | None = None) -> tuple[LoaderEntry, ...]:
        """Get registered entries for one locale, or for all locales."""
        if locale is not None:
            return tuple(self._entries.get(locale, ()))
        return tuple(entry for entries in self._entries.values() for entry in entries)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with at least one registered loader, in registration order."""
        return tuple(self._entries)

    def get_load_summary(self) -> LoadSummary:
        """Aggregate the outcome of every registered loader."""
        return LoadSummary(entries=self.entries())

    def clear(self) -> None:
        """Forget every registration."""
        self._entries.clear()


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of loader outcomes.

    All statistics are computed properties derived from the ``entries``
    snapshot. Entry states keep changing after the summary is taken only
    if a flush is still in flight.

    Attributes:
        entries: Snapshot of registered entries

    Example:
        >>> summary = i18n.get_load_summary()
        >>> if summary.has_errors:
        ...     for entry in summary.get_errors():
        ...         print(f"Failed: {entry.locale}: {entry.error}")
    """

    entries: tuple[LoaderEntry, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total}, "
            f"pending={self.pending}, "
            f"loading={self.loading}, "
            f"ok={self.successful}, "
            f"errors={self.errors})"
        )

    def _count(self, status: LoadStatus) -> int:
        return sum(1 for entry in self.entries if entry.status == status)

    @property
    def total(self) -> int:
        """Total number of registered loaders."""
        return len(self.entries)

    @property
    def pending(self) -> int:
        """Number of loaders not yet flushed."""
        return self._count(LoadStatus.PENDING)

    @property
    def loading(self) -> int:
        """Number of loaders currently running."""
        return self._count(LoadStatus.LOADING)

    @property
    def successful(self) -> int:
        """Number of loaders whose dictionary was merged."""
        return self._count(LoadStatus.SUCCESS)

    @property
    def errors(self) -> int:
        """Number of failed loaders."""
        return self._count(LoadStatus.ERROR)

    @property
    def has_errors(self) -> bool:
        """Check if any loader failed."""
        return self.errors > 0

    def get_errors(self) -> tuple[LoaderEntry, ...]:
        """Get all failed entries."""
        return tuple(entry for entry in self.entries if entry.is_error)

    def get_by_locale(self, locale: LocaleCode) -> tuple[LoaderEntry, ...]:
        """Get all entries for a specific locale."""
        return tuple(entry for entry in self.entries if entry.locale == locale)
