"""Type aliases for the loading domain.

Provides semantic type aliases used throughout lazylocale and by user
code when annotating loaders and dictionaries.

Python 3.13+.
"""

from collections.abc import Awaitable, Callable

__all__ = [
    "Dictionary",
    "Loader",
    "LocaleCode",
    "MessageKey",
]

type LocaleCode = str
"""Delimiter-segmented locale code (e.g., 'en', 'pt-BR', 'az-Cyrl-AZ')."""

type MessageKey = str
"""Dictionary key or dot-separated key path (e.g., 'title', 'menu.file.open')."""

type Dictionary = dict[str, str | Dictionary]
"""Translation mapping; values are strings or nested dictionaries."""

type Loader = Callable[[], Dictionary | Awaitable[Dictionary]]
"""Zero-argument producer of a partial dictionary, sync or async."""
