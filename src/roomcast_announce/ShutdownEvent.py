import threading
import time


class ShutdownEvent:
    """
    Cross-thread stop flag for the announce loop.

    Unlike a plain sleep, `wait_until` wakes up as soon as the event is set,
    so stopping never has to wait out a full heartbeat interval.
    """
    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait_until(self, deadline: float) -> bool:
        """
        Block until `deadline` (time.monotonic() clock) or until the event is
        set, whichever comes first.

        Returns True if the event was set, False on timeout.
        """
        remaining = max(0.0, deadline - time.monotonic())

        return self._event.wait(remaining)
