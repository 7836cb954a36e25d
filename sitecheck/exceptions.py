"""Custom exceptions for sitecheck."""


class InvalidSeedUrlError(ValueError):
    """Raised when the start URL cannot be used as a crawl seed."""

    def __init__(self, url: str, reason: str = "is not a valid absolute http(s) URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Seed URL {url!r} {reason}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")

    @property
    def reason(self) -> str:
        return str(self.original)


class FetchCancelledError(HttpFetchError):
    """Raised when a fetch is refused because the crawl was cancelled."""

    def __init__(self, url: str):
        super().__init__(url, RuntimeError("crawl cancelled"))


class HtmlParseError(Exception):
    """Raised when a page body cannot be parsed for links."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTML parse failed for {url}: {original}")


class ResponseTimeoutError(TimeoutError):
    """Raised when a response body is still arriving after the request deadline."""

    def __init__(self, url, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Response body from {url or 'server'} not read within {timeout}s")
