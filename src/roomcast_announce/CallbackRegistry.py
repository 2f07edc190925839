import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict

from roomcast_announce.AnnounceResult import AnnounceResult


ErrorCallback = Callable[[AnnounceResult], None]


@dataclass(frozen=True)
class CallbackHandle:
    id: int


class CallbackRegistry:
    """
    Error callbacks keyed by handle.

    Handles are compared by id, not by callback, so the same function can be
    subscribed twice and each subscription removed on its own.
    """
    def __init__(self) -> None:
        self._callbacks: Dict[int, ErrorCallback] = {}
        self._ids = itertools.count(1)
        self.lock = threading.Lock()

    def subscribe(self, callback: ErrorCallback) -> CallbackHandle:
        with self.lock:
            handle = CallbackHandle(next(self._ids))
            self._callbacks[handle.id] = callback

            return handle

    def unsubscribe(self, handle: CallbackHandle) -> None:
        with self.lock:
            self._callbacks.pop(handle.id, None)

    def notify(self, result: AnnounceResult) -> None:
        """
        Callbacks run outside the lock on a copy, so they are free to
        subscribe or unsubscribe while being notified.
        """
        with self.lock:
            callbacks = list(self._callbacks.values())

        for callback in callbacks:
            try:
                callback(result)
            except Exception as e:
                logging.error(f"Error callback failed: {e}", exc_info=True)

    def __len__(self) -> int:
        with self.lock:
            return len(self._callbacks)
