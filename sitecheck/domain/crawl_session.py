import logging
import queue
import threading
from typing import Iterator, Optional

from sitecheck.domain.crawl_result import CrawlResult
from sitecheck.domain.pending_work import PendingWork
from sitecheck.domain.seed_url import SeedUrl
from sitecheck.domain.visited_tracker import VisitedTracker

logger = logging.getLogger(__name__)

_CLOSED = object()


class CrawlSession:
    """
    State of a single crawl run from seed to drained result stream.

    Owns the visited tracker, the pending-work counter, the bounded result
    stream and the cancellation event. The stream is closed exactly once,
    when the pending-work counter returns to zero.
    """

    def __init__(
        self,
        seed: SeedUrl,
        visited_tracker: Optional[VisitedTracker] = None,
        stop_event: Optional[threading.Event] = None,
        result_buffer: int = 1000,
    ):
        self.seed = seed
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self.pending = PendingWork(on_drained=self._close_results)
        self._results: "queue.Queue" = queue.Queue(maxsize=max(int(result_buffer), 1))
        self._closed = threading.Event()

    def emit(self, result: CrawlResult) -> None:
        if self._closed.is_set():
            raise RuntimeError("result stream already closed")
        self._results.put(result)

    def _close_results(self) -> None:
        logger.debug("All crawl tasks finished for %s", self.seed)
        self._closed.set()
        self._results.put(_CLOSED)

    def iter_results(self) -> Iterator[CrawlResult]:
        """Yield results in arrival order until the stream is closed."""
        while True:
            item = self._results.get()
            if item is _CLOSED:
                return
            yield item

    def is_stopped(self) -> bool:
        return self.stop_event.is_set()

    def mark_stopped(self) -> None:
        """Request cancellation; remaining fetches fail with a cancellation error."""
        self.stop_event.set()
