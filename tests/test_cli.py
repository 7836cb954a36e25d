"""
Tests for the command-line entry point.
The container is injected so no network access happens.
"""
import logging
from unittest.mock import Mock

import pytest

from sitecheck.cli import EXIT_INTERRUPTED, EXIT_OK, EXIT_SETUP_ERROR, build_parser, main
from sitecheck.container import Container
from sitecheck.domain.http_response import HttpResponse
from sitecheck.exceptions import HttpFetchError


class _Site:
    def __init__(self, pages):
        self.pages = pages

    def fetch(self, url, referer=None, stop_event=None):
        page = self.pages.get(url)
        if page is None:
            raise HttpFetchError(url, ConnectionError("connection refused"))
        return HttpResponse(*page)


@pytest.fixture
def container():
    c = Container()
    c.http_session.override(Mock())
    return c


def test_parser_accepts_short_and_long_options():
    args = build_parser().parse_args(["-i", "-d", "2s", "--timeout", "500ms", "-D", "--max-num", "100", "-w", "4", "https://a.com"])
    assert args.ignore_cert is True
    assert args.delay == 2.0
    assert args.timeout == 0.5
    assert args.debug is True
    assert args.max_num == 100
    assert args.workers == 4
    assert args.start_url == "https://a.com"


def test_parser_accepts_equals_form():
    args = build_parser().parse_args(["--delay=1m", "--max-num=3", "https://a.com"])
    assert args.delay == 60.0
    assert args.max_num == 3


def test_unset_options_do_not_override_config():
    args = build_parser().parse_args(["https://a.com"])
    assert args.ignore_cert is None
    assert args.delay is None
    assert args.timeout is None
    assert args.max_num is None


@pytest.mark.parametrize("argv", [[], ["-d", "soon", "https://a.com"], ["-m", "-1", "https://a.com"]])
def test_usage_errors_exit_with_status_2(argv):
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(argv)
    assert excinfo.value.code == 2


def test_main_reports_results_and_exits_zero_even_with_broken_links(container, caplog):
    container.page_fetcher.override(_Site({
        "https://a.com/": (200, "text/html", '<a href="/ok">ok</a><a href="/missing">m</a><img src="/down.png">'),
        "https://a.com/ok": (200, "text/html", "<html></html>"),
        "https://a.com/missing": (404, "text/html", "<html></html>"),
    }))
    caplog.set_level(logging.INFO)

    assert main(["-w", "2", "https://a.com/"], container=container) == EXIT_OK

    assert "[OK] https://a.com/ -> HTTP 200" in caplog.text
    assert "[BROKEN] https://a.com/missing -> HTTP 404" in caplog.text
    assert "[BROKEN] https://a.com/down.png -> Error: connection refused" in caplog.text
    assert "Found 2 broken links:" in caplog.text
    assert " - https://a.com/missing (Status: 404)" in caplog.text


def test_main_reports_clean_site(container, caplog):
    container.page_fetcher.override(_Site({"https://a.com/": (200, "text/plain", "hi")}))
    caplog.set_level(logging.INFO)

    assert main(["https://a.com/"], container=container) == EXIT_OK
    assert "No broken links found!" in caplog.text


def test_main_invalid_seed_is_setup_error(container, caplog):
    fetcher = Mock()
    container.page_fetcher.override(fetcher)

    assert main(["ftp://a.com/"], container=container) == EXIT_SETUP_ERROR
    assert not fetcher.fetch.called
    assert "Error initializing crawler" in caplog.text


def test_main_applies_flag_overrides(container):
    container.page_fetcher.override(_Site({"https://a.com/": (200, "text/plain", "")}))
    main(["-i", "-t", "3s", "-m", "7", "-w", "2", "-d", "0", "https://a.com/"], container=container)

    assert container.config.IGNORE_CERT() is True
    assert container.config.HTTP_TIMEOUT() == 3.0
    assert container.config.MAX_PAGES() == 7
    assert container.config.MAX_WORKERS() == 2
    assert container.http_service().verify_tls is False


def test_main_closes_http_session(container):
    session = Mock()
    container.http_session.override(session)
    container.page_fetcher.override(_Site({"https://a.com/": (200, "text/plain", "")}))
    main(["https://a.com/"], container=container)
    session.close.assert_called_once_with()


def test_main_returns_interrupted_status_when_cancelled(container):
    executor = Mock()
    executor.crawl.side_effect = KeyboardInterrupt
    container.crawl_executor.override(executor)

    assert main(["https://a.com/"], container=container) == EXIT_INTERRUPTED
