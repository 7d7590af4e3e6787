"""I18n context: the public entry point of lazylocale.

An I18n instance owns every piece of mutable state (configuration, loader
registry, dictionary store, current locale, loading flag), so independent
instances never interfere and tests get isolation through reset().

Typical use:

    i18n = I18n(I18nConfig(fallback_locale="en"))
    i18n.register("en", load_json("locales/en.json"))
    i18n.register("de", fetch_remote_dictionary)
    await i18n.set_locale(["de-AT", "en-US"])
    i18n.lookup("menu.file.open")

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from lazylocale.config import I18nConfig, MissingMessage
from lazylocale.constants import LOCALE_DELIMITER
from lazylocale.enums import SwitchState
from lazylocale.loading.dictionary import DictionaryStore
from lazylocale.loading.queue import LoaderQueue
from lazylocale.loading.registry import LoaderEntry, LoaderRegistry, LoadSummary
from lazylocale.loading.types import Dictionary, Loader, LocaleCode, MessageKey
from lazylocale.resolution import get_possible_locales
from lazylocale.runtime.controller import LocaleSwitchController
from lazylocale.runtime.loading_signal import LoadingSignal
from lazylocale.runtime.observable import Observable

__all__ = ["I18n"]

logger = logging.getLogger(__name__)


class I18n:
    """Locale resolution and lazy dictionary loading for one application.

    Architecture:
    - LoaderRegistry: per-locale loaders waiting to run
    - LoaderQueue: deduplicated flushes merging loader output
    - DictionaryStore: merged dictionaries and key lookup
    - LocaleSwitchController: resolve -> flush -> commit state machine
    - LoadingSignal: debounced loading flag

    Attributes:
        config: Active configuration
    """

    __slots__ = ("_config", "_controller", "_queue", "_registry", "_signal", "_store")

    def __init__(self, config: I18nConfig | None = None) -> None:
        """Create a context and apply its configuration.

        Args:
            config: Configuration (defaults to ``I18nConfig()``)
        """
        self._config = I18nConfig()
        self._registry = LoaderRegistry()
        self._store = DictionaryStore()
        self._queue = LoaderQueue(self._registry, self._store)
        self._signal = LoadingSignal(self._config.loading_delay)
        self._controller = LocaleSwitchController(
            self._queue, self._store, self._signal, self.get_possible_locales
        )
        if config is not None:
            self.init(config)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"I18n(locale={self.current_locale!r}, "
            f"fallback={self._config.fallback_locale!r}, "
            f"locales={list(self.locales)!r})"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def config(self) -> I18nConfig:
        """Active configuration."""
        return self._config

    def init(self, config: I18nConfig | None = None, **overrides: Any) -> None:
        """Replace the configuration and publish the startup locale.

        The startup locale (initial_locale, else fallback_locale) becomes
        current directly, without resolution or loading. Await
        wait_locale() afterwards to load its dictionaries.

        Args:
            config: New configuration (defaults to ``I18nConfig()``)
            **overrides: Field overrides applied on top of config

        Raises:
            ConfigurationError: If an option value is invalid
            TypeError: If an override names an unknown option
        """
        new_config = config if config is not None else I18nConfig()
        if overrides:
            new_config = replace(new_config, **overrides)

        self._config = new_config
        self._signal.delay = new_config.loading_delay
        logger.debug("Configured: %r", new_config)

        startup = new_config.startup_locale
        if startup is not None:
            self._controller.commit(startup)

    def reset(self) -> None:
        """Return to a pristine state: no loaders, dictionaries, locale or config.

        Switches and flushes still in flight are detached: they neither
        merge their dictionaries nor commit their locale.
        """
        self._config = I18nConfig()
        self._signal.delay = self._config.loading_delay
        self._registry.clear()
        self._store.clear()
        self._queue.reset()
        self._controller.reset()
        self._signal.reset()
        logger.debug("Context reset")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, locale: LocaleCode, loader: Loader) -> LoaderEntry:
        """Register a loader producing a partial dictionary for a locale.

        Loaders run at most once, the next time the locale is flushed.
        Several loaders per locale are merged in registration order.

        Args:
            locale: Locale code
            loader: Zero-argument callable returning a dictionary or an
                awaitable of one

        Returns:
            The registry entry (useful for diagnostics)
        """
        return self._registry.register(locale, loader)

    def add_messages(self, locale: LocaleCode, *partials: Mapping[str, str | Dictionary]) -> None:
        """Merge dictionaries for a locale immediately, without a loader."""
        self._store.add(locale, *partials)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def get_possible_locales(
        self,
        locales: LocaleCode | Iterable[LocaleCode],
        fallback: LocaleCode | None = None,
    ) -> list[LocaleCode]:
        """Build the fallback chain for one or many locales.

        Args:
            locales: Requested locale or candidates in preference order
            fallback: Overrides the configured fallback locale

        Returns:
            Deduplicated chain ending with the fallback locale's chain
        """
        effective = fallback if fallback is not None else self._config.fallback_locale
        return get_possible_locales(locales, effective, delimiter=LOCALE_DELIMITER)

    def has_queue(self, locale: LocaleCode) -> bool:
        """Check if the locale has loaders that have not run yet."""
        return self._registry.has_queue(locale)

    def has_dictionary(self, locale: LocaleCode) -> bool:
        """Check if the locale has a merged dictionary."""
        return self._store.has(locale)

    def get_closest_available_locale(
        self, locales: LocaleCode | Iterable[LocaleCode]
    ) -> LocaleCode | None:
        """First locale of the chain with loaders or a dictionary, if any."""
        return self._controller.get_closest_available_locale(locales)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with registered loaders or dictionaries."""
        return tuple(dict.fromkeys((*self._registry.locales, *self._store.locales)))

    # ------------------------------------------------------------------
    # Switching and loading
    # ------------------------------------------------------------------

    def set_locale(
        self,
        locales: LocaleCode | Iterable[LocaleCode] | None,
        fallback: LocaleCode | None = None,
    ) -> asyncio.Future[LocaleCode | None]:
        """Switch the current locale, loading its dictionaries first.

        Must be called from a running event loop. The loading flag is
        already up to date when this returns; await the result to know
        when the switch has settled.

        Only the winning locale is loaded. Await wait_locale() as well when
        lookup() should fall back to parent or fallback locale content.

        Args:
            locales: Requested locale, candidates in preference order, or
                None to clear the current locale
            fallback: Overrides the configured fallback for this request

        Returns:
            Future resolving to the committed locale (None if nothing matched)

        Raises:
            LoaderError: Through the returned future, if a loader failed
        """
        return self._controller.set_locale(locales, fallback)

    async def wait_locale(self, locale: LocaleCode | None = None) -> None:
        """Load every locale of a fallback chain that still has pending loaders.

        Unlike set_locale(), this flushes the whole chain (e.g. "pt-BR",
        "pt" and the fallback), which lets lookup() fall back to parents.

        Args:
            locale: Locale whose chain to load (defaults to the current one)

        Raises:
            LoaderError: If any loader in the chain failed
        """
        target = locale if locale is not None else self.current_locale
        if target is None:
            return
        await self._queue.wait(self.get_possible_locales(target))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, key: MessageKey, locale: LocaleCode | None = None) -> str | None:
        """Find a message, walking the locale's fallback chain.

        Args:
            key: Key or dot-separated key path
            locale: Locale to start from (defaults to the current one)

        Returns:
            The first message found, the missing-message handler's result,
            or None
        """
        reference = locale if locale is not None else self.current_locale
        if reference is not None:
            for candidate in self.get_possible_locales(reference):
                message = self._store.get_message(candidate, key)
                if message is not None:
                    return message

        if self._config.warn_on_missing_messages:
            logger.warning("Missing message '%s' for locale %s", key, reference)
        handler = self._config.handle_missing_message
        if handler is not None:
            return handler(MissingMessage(key=key, locale=reference))
        return None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def locale(self) -> Observable[LocaleCode | None]:
        """Observable current locale."""
        return self._controller.locale

    @property
    def current_locale(self) -> LocaleCode | None:
        """Currently committed locale."""
        return self._controller.locale.get()

    @property
    def loading(self) -> Observable[bool]:
        """Observable loading flag."""
        return self._signal.state

    @property
    def is_loading(self) -> bool:
        """Whether a locale switch is visibly loading."""
        return self._signal.is_loading

    @property
    def dictionary(self) -> Observable[Mapping[LocaleCode, Dictionary]]:
        """Observable snapshot of all merged dictionaries."""
        return self._store.changes

    @property
    def state(self) -> SwitchState:
        """Locale switch controller state."""
        return self._controller.state

    def get_dictionary(self, locale: LocaleCode) -> Dictionary | None:
        """Copy of a locale's merged dictionary."""
        return self._store.get(locale)

    def get_load_summary(self) -> LoadSummary:
        """Outcome of every registered loader."""
        return self._registry.get_load_summary()
