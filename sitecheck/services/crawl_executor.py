import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from sitecheck.domain.crawl_result import CrawlReport, CrawlResult
from sitecheck.domain.crawl_session import CrawlSession
from sitecheck.domain.http_response import HttpResponse
from sitecheck.domain.seed_url import SeedUrl
from sitecheck.domain.visited_tracker import VisitedTracker
from sitecheck.exceptions import HtmlParseError, HttpFetchError
from sitecheck.services.crawl_policy import CrawlPolicy
from sitecheck.services.fetcher import Fetcher
from sitecheck.services.jitter import JitterDelay
from sitecheck.services.link_extractor import LinkExtractor
from sitecheck.services.result_collector import ResultCollector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CrawlRun:
    session: CrawlSession
    pool: ThreadPoolExecutor


@dataclass
class _CrawlTask:
    url: str
    referer: Optional[str] = None
    emitted: bool = False


class CrawlExecutor:
    """Dispatches crawl tasks for a run and aggregates their results.

    Every in-scope, newly claimed URL becomes one task on a bounded thread
    pool. A task fetches its URL, emits exactly one CrawlResult and, for HTML
    pages, schedules the links it finds. Each task is registered with the
    session's pending-work counter before it is submitted and deregistered
    when it finishes, so the result stream closes only after the whole tree
    of tasks has drained. This class does NOT construct its collaborators
    (that stays in the DI layer).
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        link_extractor: LinkExtractor,
        crawl_policy: Optional[CrawlPolicy] = None,
        result_collector: Optional[ResultCollector] = None,
        jitter: Optional[JitterDelay] = None,
        max_workers: int = 16,
        max_pages: int = 0,
        result_buffer: int = 1000,
        verbose: bool = False,
    ):
        self.fetcher = fetcher
        self.link_extractor = link_extractor
        self.crawl_policy = crawl_policy or CrawlPolicy()
        self.result_collector = result_collector or ResultCollector()
        self.jitter = jitter or JitterDelay()
        self.max_workers = int(max_workers) if max_workers and int(max_workers) > 0 else None
        self.max_pages = int(max_pages or 0)
        self.result_buffer = int(result_buffer)
        self.verbose = verbose

    def crawl(self, seed_url: str, stop_event: Optional[threading.Event] = None) -> CrawlReport:
        """Crawl everything reachable from `seed_url` and return the collected report.

        Raises InvalidSeedUrlError before any request is made if the seed is unusable.
        """
        session = self.start(seed_url, stop_event=stop_event)
        return self.result_collector.collect(session)

    def start(self, seed_url: str, stop_event: Optional[threading.Event] = None) -> CrawlSession:
        """Claim the seed and start crawling in the background.

        Returns the session whose result stream the caller must drain.
        """
        seed = SeedUrl.parse(seed_url)
        session = CrawlSession(
            seed,
            visited_tracker=VisitedTracker(max_claims=self.max_pages),
            stop_event=stop_event,
            result_buffer=self.result_buffer,
        )
        run = _CrawlRun(
            session=session,
            pool=ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="sitecheck"),
        )
        logger.info(
            "Starting crawl at %s (max workers: %s, max pages: %s, max delay: %ss)",
            seed, self.max_workers, self.max_pages or "unlimited", self.jitter.max_delay,
        )

        # Hold one unit of pending work while scheduling the seed so the
        # stream still closes if the seed itself is rejected.
        session.pending.add()
        try:
            self.schedule(run, seed.url)
        finally:
            self._finish_task(run)
        return session

    def schedule(self, run: _CrawlRun, url: str, referer: Optional[str] = None) -> bool:
        """Filter, claim and submit `url`; return True if a task was submitted."""
        session = run.session
        if self.crawl_policy.should_skip_due_to_scope(url, session):
            return False
        key = self.crawl_policy.claim(url, session)
        if key is None:
            return False

        session.pending.add()
        try:
            run.pool.submit(self._crawl_task, run, key, referer)
        except RuntimeError as e:
            logger.error("Could not schedule %s: %s", key, e)
            session.emit(CrawlResult(key, 0, e))
            self._finish_task(run)
            return False
        return True

    def _crawl_task(self, run: _CrawlRun, url: str, referer: Optional[str]) -> None:
        task = _CrawlTask(url, referer)
        try:
            self.crawl_url(run, task)
        except Exception as e:
            logger.exception("Unexpected error while crawling %s", url)
            if not task.emitted:
                self._emit(run, task, CrawlResult(url, 0, e))
        finally:
            self._finish_task(run)

    def _finish_task(self, run: _CrawlRun) -> None:
        run.session.pending.done()
        if run.session.pending.is_drained():
            run.pool.shutdown(wait=False)

    def _emit(self, run: _CrawlRun, task: _CrawlTask, result: CrawlResult) -> None:
        run.session.emit(result)
        task.emitted = True

    def crawl_url(self, run: _CrawlRun, task: _CrawlTask) -> None:
        session = run.session
        url = task.url
        if self.jitter.enabled:
            delay = self.jitter.wait(session.stop_event)
            logger.debug("Waited %.3fs before fetching %s", delay, url)

        try:
            response = self.fetcher.fetch(url, referer=task.referer, stop_event=session.stop_event)
        except HttpFetchError as e:
            logger.debug("Fetch failed for %s: %s", url, e.reason)
            self._emit(run, task, CrawlResult(url, 0, e))
            return
        except Exception as e:
            logger.error("Fetch error for %s: %s", url, e, exc_info=True)
            self._emit(run, task, CrawlResult(url, 0, e))
            return

        with response:
            self._emit(run, task, CrawlResult(url, response.status_code))
            if 400 <= response.status_code < 600:
                logger.warning("%s returned HTTP %s", url, response.status_code)
            else:
                logger.debug("Fetched %s -> status %s", url, response.status_code)
            if not response.is_html:
                return
            self.process_links(run, url, response)

    def process_links(self, run: _CrawlRun, url: str, response: HttpResponse) -> int:
        """Extract links from an HTML response and schedule them.

        Returns the number of new tasks submitted.
        """
        try:
            content = response.read_content()
        except Exception as e:
            logger.warning("Could not read body of %s: %s", url, e)
            return 0

        if self.verbose:
            logger.info("Retrieved HTML for %s:\n%s", url, response.read_text())

        base_url = response.url or url
        try:
            links = self.link_extractor.extract_links(content, base_url, encoding=response.charset or "utf-8")
        except HtmlParseError as e:
            logger.warning("%s", e)
            return 0

        scheduled = 0
        for link in links:
            if self.schedule(run, link, referer=url):
                scheduled += 1
        logger.debug("Found %d links on %s, %d new", len(links), url, scheduled)
        return scheduled
