import threading
from typing import Callable, Optional


class PendingWork:
    """Counts queued and in-flight crawl tasks.

    Callers must `add()` before submitting a task and `done()` once it has
    finished, after any children it spawned were added. When the count drops
    back to zero `on_drained` runs exactly once; adding work after that point
    is an error.
    """

    def __init__(self, on_drained: Optional[Callable[[], None]] = None):
        self._lock = threading.Lock()
        self._count = 0
        self._drained = threading.Event()
        self._on_drained = on_drained

    def add(self, n: int = 1) -> None:
        with self._lock:
            if self._drained.is_set():
                raise RuntimeError("cannot add work after the crawl has drained")
            self._count += n

    def done(self) -> None:
        with self._lock:
            if self._count <= 0:
                raise RuntimeError("done() called more times than add()")
            self._count -= 1
            if self._count > 0:
                return
            self._drained.set()
        if self._on_drained is not None:
            self._on_drained()

    def is_drained(self) -> bool:
        return self._drained.is_set()
