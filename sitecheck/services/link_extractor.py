import logging
from typing import Callable, List, Optional, Union

from bs4 import BeautifulSoup

from sitecheck.exceptions import HtmlParseError
from sitecheck.utils.url_utils import resolve_reference

logger = logging.getLogger(__name__)

# tag name -> attribute holding the referenced URL
LINK_ATTRIBUTES = {
    "a": "href",
    "img": "src",
}


def _parse_html(markup: Union[str, bytes], encoding: Optional[str] = None) -> BeautifulSoup:
    if isinstance(markup, bytes):
        # bs4 tries `from_encoding` first and falls back to <meta charset>
        # and its own detection if the bytes do not decode.
        return BeautifulSoup(markup, "html.parser", from_encoding=encoding)
    return BeautifulSoup(markup, "html.parser")


class LinkExtractor:
    def __init__(
        self,
        soup_factory: Optional[Callable[..., BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or _parse_html

    def extract_links(self, html: Union[str, bytes], base_url: str, encoding: Optional[str] = None) -> List[str]:
        """Return absolute URLs of every <a href> and <img src> in document order.

        `html` may be raw bytes, decoded as `encoding` when given. Values that
        are not valid URL references are skipped. Raises HtmlParseError if the
        document cannot be parsed at all.
        """
        try:
            soup = self._soup_factory(html, encoding)
        except Exception as e:
            raise HtmlParseError(base_url, e) from e

        links = []
        for tag in soup.find_all(list(LINK_ATTRIBUTES)):
            value = tag.get(LINK_ATTRIBUTES[tag.name])
            if value is None:
                continue
            value = value.strip()
            try:
                links.append(resolve_reference(base_url, value))
            except ValueError:
                logger.debug("Skipping malformed link %r on %s", value, base_url)
        return links
