import logging
import time
from typing import Optional

import requests
import urllib3
from urllib3.util.request import ACCEPT_ENCODING

from sitecheck.domain.http_response import HttpResponse
from sitecheck.exceptions import FetchCancelledError, HttpFetchError

logger = logging.getLogger(__name__)

ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8"
ACCEPT_LANGUAGE = "en-US,en;q=0.9"


class HttpService:
    """
    HTTP client wrapper for fetching pages and assets.

    Requires an `http_client` with a requests.Session-like `get()` for
    dependency injection; the session's cookie jar persists across the run.
    Bodies are streamed, so the returned HttpResponse must be closed.
    """

    def __init__(self, user_agent: str, http_client, timeout: float = 10, verify_tls: bool = True):
        self.user_agent = user_agent
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.http_client = http_client
        if not verify_tls:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def build_headers(self, referer: Optional[str] = None) -> dict:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": ACCEPT,
            "Accept-Language": ACCEPT_LANGUAGE,
            # Only advertise encodings urllib3 can actually decode.
            "Accept-Encoding": ACCEPT_ENCODING,
        }
        if referer:
            headers["Referer"] = referer
        return headers

    def fetch(self, url: str, referer: Optional[str] = None, stop_event=None) -> HttpResponse:
        """GET `url` and return the response with its body still unread.

        The timeout covers the whole exchange: reading the body later fails
        once `timeout` seconds have passed since the request was sent.
        """
        if stop_event is not None and stop_event.is_set():
            raise FetchCancelledError(url)
        started_at = time.monotonic()
        try:
            resp = self.http_client.get(
                url,
                headers=self.build_headers(referer),
                timeout=self.timeout,
                verify=self.verify_tls,
                stream=True,
            )
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        ct = None
        if hasattr(resp, "headers"):
            ct = resp.headers.get("Content-Type")

        final_url = getattr(resp, "url", None)
        if not isinstance(final_url, str):
            final_url = None

        return HttpResponse(
            resp.status_code, ct, resp,
            url=final_url,
            timeout=self.timeout,
            started_at=started_at,
        )

    def close(self) -> None:
        close = getattr(self.http_client, "close", None)
        if callable(close):
            close()
