import threading
from typing import Optional, Set


class VisitedTracker:
    """
    Records which URLs have been claimed for crawling during a run.

    Claiming is a single atomic check-and-record, so concurrent tasks that
    discover the same link race safely: exactly one of them wins the claim.
    An optional `max_claims` caps the total number of successful claims; once
    reached, every further claim fails regardless of uniqueness.
    """

    def __init__(self, max_claims: Optional[int] = None):
        """Create an empty tracker.

        If `max_claims` is None or <= 0, the tracker is unbounded.
        """
        self._max_claims = int(max_claims) if max_claims is not None else None
        if self._max_claims is not None and self._max_claims <= 0:
            self._max_claims = None

        self._lock = threading.Lock()
        self._visited: Set[str] = set()

    @property
    def max_claims(self) -> Optional[int]:
        return self._max_claims

    def try_claim(self, url: str) -> bool:
        """Claim `url`; return False if already claimed or the limit is reached."""
        with self._lock:
            if self._max_claims is not None and len(self._visited) >= self._max_claims:
                return False
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def is_visited(self, url: str) -> bool:
        with self._lock:
            return url in self._visited

    @property
    def claimed_count(self) -> int:
        with self._lock:
            return len(self._visited)

    def __len__(self) -> int:
        return self.claimed_count
