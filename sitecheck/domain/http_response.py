import codecs
import time
from typing import Any, Optional, Union

from sitecheck.exceptions import ResponseTimeoutError

CHUNK_SIZE = 16 * 1024


class HttpResponse:
    """Response from an HTTP fetch operation.

    Holds the body stream until `close()`; use it as a context manager so the
    underlying connection is released on every exit path. `body` is either a
    `requests.Response` opened with `stream=True` or an already-read str/bytes.

    When `timeout` is set, the whole body must arrive within `timeout` seconds
    of `started_at` (a `time.monotonic()` value, defaulting to construction).
    """

    def __init__(
        self,
        status_code: int,
        content_type: Optional[str] = None,
        body: Any = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        started_at: Optional[float] = None,
    ):
        self.status_code = status_code
        self.content_type = content_type
        self._body = body
        # final URL after redirects, if known
        self.url = url
        self.timeout = timeout
        self.started_at = started_at if started_at is not None else time.monotonic()
        self.closed = False
        self._content: Optional[Union[str, bytes]] = None

    @property
    def is_html(self) -> bool:
        return "text/html" in (self.content_type or "").lower()

    @property
    def charset(self) -> Optional[str]:
        """Charset declared in the Content-Type header, if any."""
        for param in (self.content_type or "").split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset":
                return value.strip().strip("\"'") or None
        return None

    def read_content(self) -> Union[str, bytes]:
        """Read the whole body undecoded.

        Raises ResponseTimeoutError if the body is still arriving once the
        deadline has passed.
        """
        if self._content is not None:
            return self._content
        if self.closed:
            raise ValueError("response body already closed")
        if self._body is None:
            self._content = b""
        elif isinstance(self._body, (str, bytes)):
            self._content = self._body
        else:
            chunks = []
            for chunk in self._body.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
                self._check_deadline()
            self._content = b"".join(chunks)
        return self._content

    def read_text(self) -> str:
        """Read the body and decode it with the declared charset, else UTF-8."""
        content = self.read_content()
        if isinstance(content, str):
            return content
        encoding = self.charset or "utf-8"
        try:
            codecs.lookup(encoding)
        except LookupError:
            encoding = "utf-8"
        return content.decode(encoding, errors="replace")

    def _check_deadline(self) -> None:
        if self.timeout and time.monotonic() - self.started_at > self.timeout:
            raise ResponseTimeoutError(self.url, self.timeout)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        close = getattr(self._body, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "HttpResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"HttpResponse(status_code={self.status_code!r}, content_type={self.content_type!r})"
