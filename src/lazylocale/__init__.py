"""lazylocale - locale fallback resolution with lazily loaded dictionaries.

Resolves requested locales to the closest supported one through subtag
fallback chains ("pt-BR" -> "pt" -> fallback locale) and loads translation
dictionaries on demand: loaders registered per locale run at most once,
concurrent loads are deduplicated, and partial dictionaries are merged in
registration order.

Public API:
    I18n - Context owning configuration, loaders, dictionaries and state
    I18nConfig - Immutable context configuration
    expand_locale - Fallback chain of a single locale
    get_possible_locales - Deduplicated fallback chain of many locales
    Observable - Subscribable value used for locale, loading and dictionaries

Exceptions:
    LazyLocaleError - Base exception class
    LoaderError - A registered loader failed
    ConfigurationError - Invalid configuration value

Submodules:
    lazylocale.loading - Registry, queue and dictionary store
    lazylocale.runtime - Switch controller, loading signal, observable
    lazylocale.locale_utils - System locale and Accept-Language detection
"""

# Essential Public API - Minimal exports for clean namespace
from .config import I18nConfig, MissingMessage
from .context import I18n
from .enums import LoadStatus, SwitchState
from .errors import ConfigurationError, LazyLocaleError, LoaderError
from .resolution import expand_locale, get_possible_locales
from .runtime import Observable

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("lazylocale")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "I18n",
    "I18nConfig",
    "LazyLocaleError",
    "LoadStatus",
    "LoaderError",
    "MissingMessage",
    "Observable",
    "SwitchState",
    "__version__",
    "expand_locale",
    "get_possible_locales",
]
