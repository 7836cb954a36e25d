import re
from urllib.parse import urljoin, urlsplit, urlunsplit

# Percent signs must introduce a two-digit hex escape.
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def normalize_url(url: str) -> str:
    """Return the claim key for `url`: scheme and host lowercased, fragment dropped.

    Raises ValueError if `url` cannot be split (e.g. an unterminated IPv6 literal).
    """
    parts = urlsplit(url.strip())
    netloc = parts.netloc
    if "@" in netloc:
        userinfo, _, hostport = netloc.rpartition("@")
        netloc = f"{userinfo}@{hostport.lower()}"
    else:
        netloc = netloc.lower()
    return urlunsplit((parts.scheme.lower(), netloc, parts.path, parts.query, ""))


def resolve_reference(base_url: str, reference: str) -> str:
    """Resolve `reference` against `base_url` (RFC 3986).

    Raises ValueError when `reference` is not a well-formed URL reference.
    """
    if _CONTROL_CHARS.search(reference):
        raise ValueError(f"control character in URL reference {reference!r}")
    if _BAD_ESCAPE.search(reference):
        raise ValueError(f"invalid percent escape in URL reference {reference!r}")
    # urlsplit rejects malformed netlocs such as "http://[::1"
    urlsplit(reference)
    return urljoin(base_url, reference)
