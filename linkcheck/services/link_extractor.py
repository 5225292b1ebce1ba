import logging
from typing import Callable, Optional, Protocol

from bs4 import BeautifulSoup

from linkcheck.exceptions import LinkExtractionError

logger = logging.getLogger(__name__)


class LinkExtractor(Protocol):
    def extract(self, body: bytes) -> list[str]: ...


class HtmlLinkExtractor:
    """Return the raw href of every anchor element in an HTML body."""

    def __init__(
        self,
        soup_factory: Optional[Callable[[bytes], BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def extract(self, body: Optional[bytes]) -> list[str]:
        if not body:
            return []

        try:
            soup = self._soup_factory(body)
        except Exception as e:
            raise LinkExtractionError(f"unable to parse body, {e}") from e

        hrefs = []
        for a in soup.find_all("a", href=True):
            href = a.get("href")
            if isinstance(href, list):
                href = " ".join(href)
            hrefs.append(href)
        logger.debug("Extracted %d links", len(hrefs))
        return hrefs
