import logging

from sitecheck.domain.crawl_session import CrawlSession
from sitecheck.utils.url_utils import normalize_url

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Decides whether a discovered URL becomes a crawl task.

    Separates scope and de-duplication decisions from crawl orchestration.
    """

    def should_skip_due_to_scope(self, url: str, session: CrawlSession) -> bool:
        """Check if URL is outside the seed's scheme and host."""
        if not session.seed.in_scope(url):
            logger.debug("Skipping (external) %s -> not same origin as %s", url, session.seed)
            return True
        return False

    def claim(self, url: str, session: CrawlSession):
        """Claim `url` for crawling and return its normalized form, or None.

        None means the URL was already claimed, the page limit is reached,
        or it cannot be normalized.
        """
        try:
            key = normalize_url(url)
        except ValueError:
            logger.debug("Skipping (unparsable) %s", url)
            return None
        if not session.visited_tracker.try_claim(key):
            logger.debug("Skipping (visited or limit reached) %s", key)
            return None
        return key
