"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from sitecheck.services.crawl_executor import CrawlExecutor
from sitecheck.services.crawl_policy import CrawlPolicy
from sitecheck.services.fetcher import HttpServiceFetcher
from sitecheck.services.http_service import HttpService
from sitecheck.services.jitter import JitterDelay
from sitecheck.services.link_extractor import LinkExtractor
from sitecheck.services.result_collector import ResultCollector
from sitecheck import config as env


# Environment variables used by the container (read via `sitecheck.config` helpers).
#
# Command-line flags override these values for a single run.
#
# SITECHECK_USER_AGENT (str, default: desktop Chrome UA string)
#   User-Agent header for outbound HTTP requests.
#
# SITECHECK_HTTP_TIMEOUT (float seconds, default: 10)
#   Timeout for each outbound HTTP request.
#
# SITECHECK_IGNORE_CERT (bool, default: false)
#   Skip TLS certificate verification (self-signed or expired certificates).
#
# SITECHECK_CRAWL_MAX_DELAY (float seconds, default: 0)
#   Upper bound of the random delay before each request. 0 disables it.
#
# SITECHECK_MAX_PAGES (int, default: 0)
#   Maximum number of URLs claimed for crawling. 0 means unlimited.
#
# SITECHECK_MAX_WORKERS (int, default: 16)
#   Size of the thread pool that runs crawl tasks.
#
# SITECHECK_RESULT_BUFFER (int, default: 1000)
#   Capacity of the result stream between crawl tasks and the collector.
#
# SITECHECK_VERBOSE (bool, default: false)
#   Log retrieved HTML and per-request progress.
ENV = {
    "USER_AGENT": env.get_str_env("SITECHECK_USER_AGENT", env.DEFAULT_USER_AGENT),
    "HTTP_TIMEOUT": env.get_float_env("SITECHECK_HTTP_TIMEOUT", 10.0),
    "IGNORE_CERT": env.get_bool_env("SITECHECK_IGNORE_CERT", False),
    "CRAWL_MAX_DELAY": env.get_float_env("SITECHECK_CRAWL_MAX_DELAY", 0.0),
    "MAX_PAGES": env.get_int_env("SITECHECK_MAX_PAGES", 0),
    "MAX_WORKERS": env.get_int_env("SITECHECK_MAX_WORKERS", 16),
    "RESULT_BUFFER": env.get_int_env("SITECHECK_RESULT_BUFFER", 1000),
    "VERBOSE": env.get_bool_env("SITECHECK_VERBOSE", False),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for sitecheck."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # One session per run so cookies persist across its requests
    http_session = providers.Singleton(requests.Session)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=http_session,
        timeout=config.HTTP_TIMEOUT.as_(float),
        verify_tls=providers.Callable(lambda ignore: not ignore, config.IGNORE_CERT.as_(bool)),
    )

    page_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    crawl_policy = providers.Singleton(
        CrawlPolicy
    )

    result_collector = providers.Singleton(
        ResultCollector
    )

    jitter = providers.Factory(
        JitterDelay,
        max_delay=config.CRAWL_MAX_DELAY.as_(float),
    )

    crawl_executor = providers.Factory(
        CrawlExecutor,
        fetcher=page_fetcher,
        link_extractor=link_extractor,
        crawl_policy=crawl_policy,
        result_collector=result_collector,
        jitter=jitter,
        max_workers=config.MAX_WORKERS.as_(int),
        max_pages=config.MAX_PAGES.as_(int),
        result_buffer=config.RESULT_BUFFER.as_(int),
        verbose=config.VERBOSE.as_(bool),
    )
