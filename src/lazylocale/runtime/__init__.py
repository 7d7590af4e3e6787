"""Runtime state of a locale switch.

Provides the observable channel, the debounced loading flag and the
locale switch state machine. Depends on the loading package.

Python 3.13+.
"""

from .controller import LocaleSwitchController
from .loading_signal import LoadingSignal
from .observable import Observable

__all__ = [
    "LoadingSignal",
    "LocaleSwitchController",
    "Observable",
]
