"""Loader registration, deduplicated flushing and dictionary storage.

Submodules:
    types      - PEP 695 type aliases (LocaleCode, Dictionary, Loader, MessageKey)
    registry   - LoaderEntry, LoaderRegistry, LoadSummary
    queue      - LoaderQueue (concurrent, order-preserving flushes)
    dictionary - DictionaryStore, get_message_from_dictionary

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from lazylocale.enums import LoadStatus
from lazylocale.loading.dictionary import DictionaryStore, get_message_from_dictionary
from lazylocale.loading.queue import LoaderQueue
from lazylocale.loading.registry import LoaderEntry, LoaderRegistry, LoadSummary
from lazylocale.loading.types import Dictionary, Loader, LocaleCode, MessageKey

__all__ = [
    # Registration
    "LoaderEntry",
    "LoaderRegistry",
    # Flushing
    "LoaderQueue",
    # Storage and lookup
    "DictionaryStore",
    "get_message_from_dictionary",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    # Type aliases for user code type annotations
    "Dictionary",
    "Loader",
    "LocaleCode",
    "MessageKey",
]
