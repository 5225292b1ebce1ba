import logging
from typing import NamedTuple, Optional
from urllib.parse import urlparse

from linkcheck.domain.crawl_state import CrawlState
from linkcheck.exceptions import UrlParseError
from linkcheck.services.error_log import ErrorLog
from linkcheck.services.url_canonicalizer import UrlCanonicalizer

logger = logging.getLogger(__name__)

SKIPPED_SCHEMES = ("mailto:", "ftp:", "tel:", "javascript:")


class CandidateLink(NamedTuple):
    """A link found on a page, ready to be dispatched.

    `error` is set when the raw href could not be canonicalised; `url` then
    holds the raw href.
    """
    url: str
    error: Optional[str] = None


class LinkProcessor:
    """Filters and canonicalises the hrefs extracted from one page."""

    def __init__(self, canonicalizer: UrlCanonicalizer, error_log: Optional[ErrorLog] = None):
        self.canonicalizer = canonicalizer
        self.error_log = error_log or ErrorLog()

    def is_link_ok_to_add(self, link: str, state: CrawlState) -> bool:
        lowered = link.strip().lower()
        if lowered.startswith(SKIPPED_SCHEMES):
            logger.debug("Skipping (scheme) %s", link)
            return False
        try:
            hostname = urlparse(link.strip()).hostname
        except ValueError as e:
            # Left for canonicalisation to report against the page.
            logger.debug("Unparseable link %s: %s", link, e)
            return True
        if hostname == "localhost" and not state.domain.lower().startswith("localhost"):
            logger.debug("Skipping (localhost) %s", link)
            return False
        return True

    def process(self, hrefs: list[str], state: CrawlState) -> list[CandidateLink]:
        """Turn raw hrefs into candidate links, preserving page order."""
        candidates = []
        for href in hrefs:
            if href is None or not self.is_link_ok_to_add(href, state):
                continue
            try:
                url = self.canonicalizer.canonicalise_child(href, state)
            except UrlParseError as e:
                self.error_log.write("unable to canonicalise url: %s, %s", href, e.reason)
                candidates.append(CandidateLink(url=href.strip(), error=str(e)))
                continue
            candidates.append(CandidateLink(url=url))
        return candidates
