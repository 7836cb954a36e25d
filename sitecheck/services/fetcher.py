from __future__ import annotations

from typing import Optional, Protocol

from sitecheck.domain.http_response import HttpResponse


class Fetcher(Protocol):
    """Fetch a URL and return an open HTTP response.

    Implementations raise HttpFetchError when no response was received and
    never interpret the status code themselves.
    """

    def fetch(self, url: str, referer: Optional[str] = None, stop_event=None) -> HttpResponse: ...


class HttpServiceFetcher:
    def __init__(self, http_service):
        self._http_service = http_service

    def fetch(self, url: str, referer: Optional[str] = None, stop_event=None) -> HttpResponse:
        return self._http_service.fetch(url, referer=referer, stop_event=stop_event)
