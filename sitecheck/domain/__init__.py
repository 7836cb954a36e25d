"""Domain objects for sitecheck - explicit re-exports to satisfy linters."""
from .crawl_result import CrawlReport as CrawlReport
from .crawl_result import CrawlResult as CrawlResult
from .crawl_session import CrawlSession as CrawlSession
from .http_response import HttpResponse as HttpResponse
from .pending_work import PendingWork as PendingWork
from .seed_url import SeedUrl as SeedUrl
from .visited_tracker import VisitedTracker as VisitedTracker

__all__ = [
    "CrawlReport",
    "CrawlResult",
    "CrawlSession",
    "HttpResponse",
    "PendingWork",
    "SeedUrl",
    "VisitedTracker",
]
