"""Enumerations for lazylocale type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so log records and diagnostics
receive plain values without boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Lifecycle of a registered loader.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    PENDING = "pending"
    """Registered, not yet taken by a flush"""

    LOADING = "loading"
    """Taken by a flush, produce() not yet settled"""

    SUCCESS = "success"
    """produce() returned a dictionary that was merged into the store"""

    ERROR = "error"
    """produce() raised; the entry stays consumed and is never retried"""


class SwitchState(StrEnum):
    """State of the locale switch controller.

    StrEnum provides automatic string conversion: str(SwitchState.IDLE) == "idle"
    """

    IDLE = "idle"
    """Ready for the next request"""

    RESOLVING = "resolving"
    """Computing the fallback chain and picking the winning locale"""

    FLUSHING = "flushing"
    """Waiting for the winning locale's loaders to settle"""

    COMMITTED = "committed"
    """Winner published as the current locale"""


__all__ = [
    "LoadStatus",
    "SwitchState",
]
