"""Shared constants for lazylocale.

Centralizes defaults used by configuration, resolution and dictionary
lookup so that every subsystem agrees on a single source of truth.

Constants are grouped by domain:
- Locale syntax: subtag delimiter
- Loading: debounce threshold for the loading signal
- Lookup: key path separator and memoization bounds

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale syntax
    "LOCALE_DELIMITER",
    # Loading
    "DEFAULT_LOADING_DELAY",
    # Lookup
    "KEY_PATH_SEPARATOR",
    "MAX_LOOKUP_CACHE_SIZE",
]

# ============================================================================
# LOCALE SYNTAX
# ============================================================================

# BCP-47 style subtag separator ("az-Cyrl-AZ"). Locale codes are treated as
# opaque tokens split on this delimiter; no case folding is applied.
LOCALE_DELIMITER: str = "-"

# ============================================================================
# LOADING
# ============================================================================

# Seconds a locale-to-locale switch may spend flushing before the loading
# signal is raised. Flushes settling faster never surface as loading.
DEFAULT_LOADING_DELAY: float = 0.2

# ============================================================================
# LOOKUP
# ============================================================================

# Separator for nested dictionary key paths ("menu.file.open").
KEY_PATH_SEPARATOR: str = "."

# Upper bound on memoized lookups per locale. The memo is dropped wholesale
# when exceeded and on every merge into that locale's dictionary.
MAX_LOOKUP_CACHE_SIZE: int = 1000
