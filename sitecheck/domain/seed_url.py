from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from sitecheck.exceptions import InvalidSeedUrlError
from sitecheck.utils.url_utils import normalize_url

_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class SeedUrl:
    """The normalized start URL; its scheme and host define the crawl scope."""

    url: str
    scheme: str
    host: str

    @classmethod
    def parse(cls, raw: str) -> "SeedUrl":
        if raw is None or not str(raw).strip():
            raise InvalidSeedUrlError(str(raw), "is empty")
        try:
            url = normalize_url(raw)
            parts = urlsplit(url)
            host = _host_key(parts.hostname, parts.port)
        except ValueError as e:
            raise InvalidSeedUrlError(raw, f"cannot be parsed: {e}") from e
        if parts.scheme not in _SCHEMES:
            raise InvalidSeedUrlError(raw, "must use http or https")
        if not host:
            raise InvalidSeedUrlError(raw, "has no host")
        return cls(url=url, scheme=parts.scheme, host=host)

    def in_scope(self, url: str) -> bool:
        """True if `url` has the same scheme and (case-insensitive) host as the seed."""
        try:
            parts = urlsplit(url)
            host = _host_key(parts.hostname, parts.port)
        except ValueError:
            return False
        return parts.scheme == self.scheme and host == self.host

    def __str__(self) -> str:
        return self.url


def _host_key(hostname: Optional[str], port: Optional[int]) -> str:
    if not hostname:
        return ""
    host = hostname.lower()
    return f"{host}:{port}" if port is not None else host
