import random
import threading
from typing import Optional


class JitterDelay:
    """Random pre-request pause in [0, max_delay) seconds.

    One random source is shared by all tasks of a run, so draws are
    serialized with a lock. The pause is cut short when `stop_event` is set.
    """

    def __init__(self, max_delay: float = 0.0, rng: Optional[random.Random] = None):
        self.max_delay = max(float(max_delay or 0), 0.0)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.max_delay > 0

    def next_delay(self) -> float:
        if not self.enabled:
            return 0.0
        with self._lock:
            return self._rng.random() * self.max_delay

    def wait(self, stop_event: Optional[threading.Event] = None) -> float:
        """Sleep for a random delay; return the delay that was drawn."""
        delay = self.next_delay()
        if delay <= 0:
            return 0.0
        if stop_event is None:
            stop_event = threading.Event()
        stop_event.wait(delay)
        return delay
