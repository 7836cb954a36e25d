"""Crawl result data model."""
from typing import List, NamedTuple, Optional

from sitecheck.exceptions import HttpFetchError


class CrawlResult(NamedTuple):
    """Outcome of fetching one claimed URL."""

    url: str
    """The normalized URL that was fetched"""

    status: int = 0
    """HTTP status code, 0 when no response was received"""

    error: Optional[BaseException] = None
    """Set iff the fetch itself failed"""

    @property
    def is_broken(self) -> bool:
        return self.error is not None or 400 <= self.status < 600

    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        if isinstance(self.error, HttpFetchError):
            return self.error.reason
        return str(self.error)


class CrawlReport(NamedTuple):
    """All results of a run, in arrival order."""

    results: List[CrawlResult]

    stopped: bool = False
    """True if the crawl was cancelled before it drained on its own"""

    @property
    def broken(self) -> List[CrawlResult]:
        return [r for r in self.results if r.is_broken]

    @property
    def ok_count(self) -> int:
        return len(self.results) - len(self.broken)
