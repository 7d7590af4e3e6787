"""Configuration for the I18n context.

Provides a single frozen dataclass holding every option of a context,
replaced as a whole by I18n.init() and dropped by I18n.reset().

Python 3.13+.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from lazylocale.constants import DEFAULT_LOADING_DELAY
from lazylocale.errors import ConfigurationError
from lazylocale.loading.types import LocaleCode, MessageKey

__all__ = ["I18nConfig", "MissingMessage"]


@dataclass(frozen=True, slots=True)
class MissingMessage:
    """Information about a lookup that found no message.

    Provided to the handle_missing_message callback.

    Attributes:
        key: Requested key path
        locale: Locale the lookup started from (None if no locale is set)
    """

    key: MessageKey
    locale: LocaleCode | None


@dataclass(frozen=True, slots=True)
class I18nConfig:
    """Immutable configuration for an I18n context.

    All fields have defaults; ``I18nConfig()`` is a usable configuration.

    Attributes:
        fallback_locale: Locale appended to every fallback chain (default: None)
        initial_locale: Locale committed by init(). Defaults to
            fallback_locale when not given.
        loading_delay: Seconds a locale-to-locale switch may spend loading
            before the loading flag is raised (default: 0.2). Zero raises
            it immediately.
        warn_on_missing_messages: Log a warning when lookup() misses
            (default: True)
        handle_missing_message: Optional callback for lookup() misses. A
            non-None return value is used as the message.

    Example:
        >>> config = I18nConfig(fallback_locale="en", loading_delay=0.1)
        >>> i18n = I18n(config)
        >>> i18n.locale.get()
        'en'
    """

    fallback_locale: LocaleCode | None = None
    initial_locale: LocaleCode | None = None
    loading_delay: float = DEFAULT_LOADING_DELAY
    warn_on_missing_messages: bool = True
    handle_missing_message: Callable[[MissingMessage], str | None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ConfigurationError: If loading_delay is negative or not finite,
                or if handle_missing_message is not callable
        """
        if not math.isfinite(self.loading_delay) or self.loading_delay < 0:
            msg = f"loading_delay must be non-negative seconds, got {self.loading_delay}"
            raise ConfigurationError(msg)
        if self.handle_missing_message is not None and not callable(self.handle_missing_message):
            msg = "handle_missing_message must be callable"
            raise ConfigurationError(msg)

    @property
    def startup_locale(self) -> LocaleCode | None:
        """Locale committed by init(): initial_locale, else fallback_locale."""
        return self.initial_locale or self.fallback_locale
