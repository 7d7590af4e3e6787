"""Locale fallback chain resolution.

Computes the ordered list of locales to try for a request, most specific
first, ending with the configured fallback locale and its own parents.

Resolution is purely string based: locale codes are split on the subtag
delimiter and never validated, so any non-empty string (and the empty
string) produces a chain.

Example:
    >>> expand_locale("az-Cyrl-AZ")
    ['az-Cyrl-AZ', 'az-Cyrl', 'az']
    >>> get_possible_locales(["en-US", "es-AR"], fallback="pt")
    ['en-US', 'en', 'es-AR', 'es', 'pt']

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable

from lazylocale.constants import LOCALE_DELIMITER
from lazylocale.errors import ConfigurationError
from lazylocale.loading.types import LocaleCode

__all__ = [
    "expand_locale",
    "get_possible_locales",
]


def expand_locale(locale: LocaleCode, delimiter: str = LOCALE_DELIMITER) -> list[LocaleCode]:
    """Expand a locale into its parent locales, most specific first.

    Drops the last subtag one at a time. A locale with n segments yields a
    chain of exactly n entries whose last element is the first segment.

    Args:
        locale: Locale code (e.g., "az-Cyrl-AZ")
        delimiter: Subtag separator

    Returns:
        Fallback chain for the single locale

    Raises:
        ConfigurationError: If delimiter is empty

    Example:
        >>> expand_locale("en-US")
        ['en-US', 'en']
        >>> expand_locale("en")
        ['en']
    """
    if not delimiter:
        msg = "delimiter must be a non-empty string"
        raise ConfigurationError(msg)
    segments = locale.split(delimiter)
    return [delimiter.join(segments[:end]) for end in range(len(segments), 0, -1)]


def get_possible_locales(
    locales: LocaleCode | Iterable[LocaleCode],
    fallback: LocaleCode | None = None,
    *,
    delimiter: str = LOCALE_DELIMITER,
) -> list[LocaleCode]:
    """Build the deduplicated fallback chain for one or many locales.

    Each requested locale contributes its expanded chain in request order.
    A locale already present keeps its first position. The fallback
    locale's chain is appended last through the same deduplication.

    Args:
        locales: A single locale code or candidates in preference order
        fallback: Locale appended after all candidates (optional)
        delimiter: Subtag separator

    Returns:
        Ordered list of distinct locale codes

    Example:
        >>> get_possible_locales("pt-BR", "pt-BR")
        ['pt-BR', 'pt']
        >>> get_possible_locales("pt", "pt-BR")
        ['pt', 'pt-BR']
    """
    candidates = [locales] if isinstance(locales, str) else list(locales)
    if fallback is not None:
        candidates.append(fallback)

    # dict.fromkeys() removes duplicates while maintaining insertion order
    chain: dict[LocaleCode, None] = {}
    for candidate in candidates:
        chain.update(dict.fromkeys(expand_locale(candidate, delimiter)))
    return list(chain)
