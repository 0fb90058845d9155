from typing import Callable, List
import logging

logger = logging.getLogger(__name__)


class Signal:
    """
    A tiny observer list. Callbacks take no arguments; they read whatever
    state they need from the object that owns the signal.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._callbacks: List[Callable[[], None]] = []

    def connect(self, callback: Callable[[], None]):
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        return callback

    def disconnect(self, callback: Callable[[], None]):
        try:
            self._callbacks.remove(callback)
        except ValueError:
            raise ValueError(f"Callback not connected to signal {self.name!r}")

    def emit(self):
        logger.debug("emit %s -> %d listener(s)", self.name, len(self._callbacks))
        # copy so a callback may disconnect itself while we iterate
        for callback in list(self._callbacks):
            callback()

    def __len__(self):
        return len(self._callbacks)
