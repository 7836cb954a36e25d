import argparse
import logging
import sys
from typing import List, Optional

from sitecheck.container import Container
from sitecheck.exceptions import InvalidSeedUrlError
from sitecheck.services.report_formatter import format_report
from sitecheck.utils.duration_utils import parse_duration

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SETUP_ERROR = 1
EXIT_INTERRUPTED = 130

EPILOG = """\
Example:
  %(prog)s -i -d 2s -t 5s -D -m 100 https://example.com
"""


def _duration(value: str) -> float:
    try:
        return parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from e
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value!r}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitecheck",
        description=(
            "Crawl a website starting from <start-url>, following links within the "
            "same host and scheme, and report broken links (HTTP errors)."
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("start_url", metavar="start-url", help="Start URL (e.g. https://example.com)")
    parser.add_argument("-i", "--ignore-cert", action="store_true", default=None,
                        help="Ignore invalid (self-signed or expired) TLS certificates")
    parser.add_argument("-d", "--delay", type=_duration, metavar="DURATION",
                        help="Random delay up to DURATION before each request (e.g. 2s, 500ms). Default: 0")
    parser.add_argument("-t", "--timeout", type=_duration, metavar="DURATION",
                        help="HTTP request timeout (e.g. 10s, 5s). Default: 10s")
    parser.add_argument("-D", "--debug", action="store_true", default=None,
                        help="Print retrieved HTML content and per-request progress")
    parser.add_argument("-m", "--max-num", type=_non_negative_int, metavar="N",
                        help="Maximum number of pages to scan. Default: no limit")
    parser.add_argument("-w", "--workers", type=_non_negative_int, metavar="N",
                        help="Number of concurrent fetch workers. Default: 16")
    return parser


def apply_overrides(container: Container, args: argparse.Namespace) -> None:
    """Copy command-line values that were given onto the container config."""
    overrides = {
        "IGNORE_CERT": args.ignore_cert,
        "CRAWL_MAX_DELAY": args.delay,
        "HTTP_TIMEOUT": args.timeout,
        "VERBOSE": args.debug,
        "MAX_PAGES": args.max_num,
        "MAX_WORKERS": args.workers,
    }
    for key, value in overrides.items():
        if value is not None:
            getattr(container.config, key).from_value(value)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S",
    )
    # urllib3 connection chatter drowns the crawl output
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)
    container = container or Container()
    apply_overrides(container, args)
    configure_logging(bool(container.config.VERBOSE()))

    try:
        executor = container.crawl_executor()
        report = executor.crawl(args.start_url)
    except InvalidSeedUrlError as e:
        logger.error("Error initializing crawler: %s", e)
        return EXIT_SETUP_ERROR
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_INTERRUPTED
    finally:
        container.http_service().close()

    logger.info("Crawl finished. Results:")
    for line in format_report(report):
        logger.info("%s", line)

    if report.stopped:
        return EXIT_INTERRUPTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
