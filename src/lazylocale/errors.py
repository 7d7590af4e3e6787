"""Exception hierarchy for lazylocale.

Only loader failures and invalid configuration are errors. Resolving to
no matching locale is a normal outcome and never raises.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lazylocale.loading.types import LocaleCode

__all__ = [
    "ConfigurationError",
    "LazyLocaleError",
    "LoaderError",
]


class LazyLocaleError(Exception):
    """Base exception for all lazylocale errors."""


class ConfigurationError(LazyLocaleError, ValueError):
    """Invalid I18nConfig value.

    Subclasses ValueError so callers validating plain arguments can keep
    catching the builtin type.
    """


class LoaderError(LazyLocaleError):
    """One or more registered loaders failed during a flush.

    Failed entries stay consumed: their content is missing from the
    locale's dictionary until a new loader is registered and flushed.
    Results from sibling loaders that succeeded are still merged.

    The first failure is chained as ``__cause__``.

    Attributes:
        locale: Locale whose flush failed
        failures: Every exception raised by the failing loaders, in
            registration order

    Example:
        >>> try:
        ...     await i18n.set_locale("de")
        ... except LoaderError as e:
        ...     print(f"{e.locale}: {len(e.failures)} loader(s) failed")
    """

    def __init__(self, locale: LocaleCode, failures: tuple[BaseException, ...]) -> None:
        """Initialize LoaderError.

        Args:
            locale: Locale whose flush failed
            failures: Exceptions raised by the failing loaders
        """
        count = len(failures)
        noun = "loader" if count == 1 else "loaders"
        first = failures[0] if failures else None
        detail = f": {type(first).__name__}: {first}" if first is not None else ""
        super().__init__(f"{count} {noun} failed for locale '{locale}'{detail}")
        self.locale = locale
        self.failures = failures
