"""Locale detection utilities.

Helpers producing candidate locales for I18n.set_locale() from the
environment: the operating system locale and HTTP Accept-Language headers.
All results use the hyphenated form expected by fallback resolution.

Python 3.13+.
"""

from __future__ import annotations

import math
import os
from collections.abc import Iterable

from lazylocale.constants import LOCALE_DELIMITER
from lazylocale.loading.types import LocaleCode

__all__ = [
    "get_locale_from_accept_language",
    "get_system_locale",
    "normalize_locale",
    "parse_accept_language",
]


def normalize_locale(locale_code: str) -> LocaleCode:
    """Convert a POSIX locale name to the hyphenated form.

    Strips encoding and modifier suffixes, then replaces underscores with
    the subtag delimiter. Case is preserved.

    Args:
        locale_code: POSIX or BCP-47 code (e.g., "pt_BR.UTF-8", "en-US")

    Returns:
        Hyphenated locale code (e.g., "pt-BR")

    Example:
        >>> normalize_locale("de_DE.UTF-8")
        'de-DE'
        >>> normalize_locale("sr_RS@latin")
        'sr-RS'
        >>> normalize_locale("en")
        'en'
    """
    base = locale_code.split(".", 1)[0].split("@", 1)[0]
    return base.replace("_", LOCALE_DELIMITER)


def get_system_locale(*, raise_on_failure: bool = False) -> LocaleCode | None:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return None.

    Returns:
        Detected locale code in hyphenated form, or None

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.

    Example:
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> get_system_locale()
        'de-DE'
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and normalize_locale(system_locale) not in ("C", "POSIX"):
            return normalize_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and normalize_locale(value) not in ("C", "POSIX", ""):
            return normalize_locale(value)

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)
    return None


def parse_accept_language(header: str) -> list[LocaleCode]:
    """Parse an HTTP Accept-Language header into locales by preference.

    Entries are ordered by descending quality value; equal weights keep
    header order. The wildcard, entries with q=0 and malformed or
    non-finite quality values are dropped; weights above 1 count as 1.

    Args:
        header: Header value (e.g., "da, en-GB;q=0.8, en;q=0.7")

    Returns:
        Locale codes, most preferred first

    Example:
        >>> parse_accept_language("en;q=0.7, da, en-GB;q=0.8")
        ['da', 'en-GB', 'en']
    """
    weighted: list[tuple[float, LocaleCode]] = []
    for part in header.split(","):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue

        quality = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                quality = float(value)
            except ValueError:
                quality = 0.0
        if not math.isfinite(quality) or quality <= 0:
            continue
        quality = min(quality, 1.0)
        weighted.append((quality, normalize_locale(tag)))

    # sorted() is stable: equal weights keep header order
    ordered = sorted(weighted, key=lambda item: item[0], reverse=True)
    return list(dict.fromkeys(locale for _, locale in ordered))


def get_locale_from_accept_language(
    header: str, available: Iterable[LocaleCode] | None = None
) -> LocaleCode | None:
    """Pick a locale from an Accept-Language header.

    Without ``available`` the most preferred locale of the header is
    returned. With it, Babel's negotiation matches preferences against
    the available locales case-insensitively, also trying each preference
    without its territory and Babel's well-known aliases.

    Args:
        header: Accept-Language header value
        available: Locales the application supports (optional)

    Returns:
        Chosen locale code, or None if nothing matched

    Example:
        >>> get_locale_from_accept_language("de-AT, en;q=0.5", ["en", "de"])
        'de'
    """
    preferred = parse_accept_language(header)
    if available is None:
        return preferred[0] if preferred else None

    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.core import negotiate_locale  # noqa: PLC0415

    return negotiate_locale(preferred, list(available), sep=LOCALE_DELIMITER)
