"""Per-locale dictionary storage with shallow merge and key-path lookup.

Each locale owns one merged Dictionary. Partial dictionaries contributed
by later loaders are shallow-merged into it: on a top-level key conflict
the later partial wins and nested dictionaries are replaced, not merged.

Lookups traverse dot-separated key paths through nested dictionaries and
are memoized per locale until the next merge into that locale. The store
owns its dictionaries: partials are copied on the way in, and get() and
the published snapshots hand out copies, so callers cannot mutate them.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from copy import deepcopy
from types import MappingProxyType

from lazylocale.constants import KEY_PATH_SEPARATOR, MAX_LOOKUP_CACHE_SIZE
from lazylocale.loading.types import Dictionary, LocaleCode, MessageKey
from lazylocale.runtime.observable import Observable

__all__ = [
    "DictionaryStore",
    "get_message_from_dictionary",
]

logger = logging.getLogger(__name__)


def get_message_from_dictionary(
    dictionary: Mapping[str, object],
    key: MessageKey,
    separator: str = KEY_PATH_SEPARATOR,
) -> str | None:
    """Resolve a key path inside one dictionary.

    At every level the remaining path is first tried as a literal key, so
    flat dotted keys ({"a.b": "x"}) and nested ones ({"a": {"b": "x"}})
    both resolve "a.b". Otherwise the first segment selects a nested
    dictionary. Segments match exactly.

    Args:
        dictionary: Merged dictionary for one locale
        key: Key or key path (e.g., "menu.file.open")
        separator: Path separator

    Returns:
        The string value, or None if missing or not a string
    """
    node: object = dictionary
    remaining = key
    while isinstance(node, Mapping):
        if remaining in node:
            value = node[remaining]
            return value if isinstance(value, str) else None
        head, sep, tail = remaining.partition(separator)
        if not sep:
            return None
        node = node.get(head)
        remaining = tail
    return None


class DictionaryStore:
    """Mapping from locale to its merged dictionary.

    Written by LoaderQueue flushes and add(); read by lookups. Every change
    publishes a fresh read-only snapshot through ``changes``.

    Example:
        >>> store = DictionaryStore()
        >>> store.add("en", {"a": "1", "b": "2"}, {"b": "3"})
        >>> store.get("en")
        {'a': '1', 'b': '3'}
        >>> store.get_message("en", "b")
        '3'
    """

    __slots__ = ("_changes", "_dictionaries", "_lookup_cache", "_separator")

    def __init__(self, separator: str = KEY_PATH_SEPARATOR) -> None:
        """Initialize an empty store.

        Args:
            separator: Key path separator used by get_message()
        """
        self._dictionaries: dict[LocaleCode, Dictionary] = {}
        self._lookup_cache: dict[LocaleCode, dict[MessageKey, str | None]] = {}
        self._separator = separator
        self._changes: Observable[Mapping[LocaleCode, Dictionary]] = Observable(
            MappingProxyType({}), name="dictionary"
        )

    @property
    def changes(self) -> Observable[Mapping[LocaleCode, Dictionary]]:
        """Observable snapshot of every locale's dictionary."""
        return self._changes

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales that have a dictionary, in creation order."""
        return tuple(self._dictionaries)

    def has(self, locale: LocaleCode) -> bool:
        """Check if the locale has a dictionary (possibly empty)."""
        return locale in self._dictionaries

    def get(self, locale: LocaleCode) -> Dictionary | None:
        """Get a deep copy of the merged dictionary for a locale."""
        dictionary = self._dictionaries.get(locale)
        return deepcopy(dictionary) if dictionary is not None else None

    def add(self, locale: LocaleCode, *partials: Mapping[str, str | Dictionary]) -> None:
        """Shallow-merge partial dictionaries into a locale, in order.

        Creates the locale's dictionary if needed, even when no partial is
        given, so that the locale counts as available for resolution.

        Args:
            locale: Locale code
            *partials: Dictionaries to merge; later ones win on conflicts

        Raises:
            TypeError: If a partial is not a mapping
        """
        merged: Dictionary = dict(self._dictionaries.get(locale, {}))
        for partial in partials:
            if not isinstance(partial, Mapping):
                msg = (
                    f"Dictionary for locale '{locale}' must be a mapping, "
                    f"got {type(partial).__name__}"
                )
                raise TypeError(msg)
            merged.update({key: deepcopy(value) for key, value in partial.items()})

        self._dictionaries[locale] = merged
        self._lookup_cache.pop(locale, None)
        logger.debug(
            "Merged %d partial(s) into locale %s (%d keys)", len(partials), locale, len(merged)
        )
        self._changes.set(MappingProxyType(deepcopy(self._dictionaries)))

    def get_message(self, locale: LocaleCode, key: MessageKey) -> str | None:
        """Resolve a key path within one locale's dictionary.

        Args:
            locale: Locale code
            key: Key or dot-separated key path

        Returns:
            The string value, or None if the locale or key is missing
        """
        dictionary = self._dictionaries.get(locale)
        if dictionary is None:
            return None

        cache = self._lookup_cache.setdefault(locale, {})
        if key in cache:
            return cache[key]

        if len(cache) >= MAX_LOOKUP_CACHE_SIZE:
            cache.clear()
        message = get_message_from_dictionary(dictionary, key, self._separator)
        cache[key] = message
        return message

    def clear(self) -> None:
        """Drop every dictionary and memoized lookup."""
        self._dictionaries.clear()
        self._lookup_cache.clear()
        self._changes.set(MappingProxyType({}))
