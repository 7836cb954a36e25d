import logging
from typing import List

from sitecheck.domain.crawl_result import CrawlReport, CrawlResult
from sitecheck.domain.crawl_session import CrawlSession

logger = logging.getLogger(__name__)


class ResultCollector:
    """Drains a session's result stream into an arrival-ordered report."""

    def collect(self, session: CrawlSession) -> CrawlReport:
        results: List[CrawlResult] = []
        try:
            for result in session.iter_results():
                results.append(result)
        except KeyboardInterrupt:
            # Cancel outstanding fetches; every claimed URL still reports a
            # (cancelled) result, so keep draining until the stream closes.
            logger.warning("Interrupted; cancelling remaining fetches")
            session.mark_stopped()
            for result in session.iter_results():
                results.append(result)

        broken = sum(1 for r in results if r.is_broken)
        logger.debug("Collected %d results (%d broken) for %s", len(results), broken, session.seed)
        return CrawlReport(results=results, stopped=session.is_stopped())
