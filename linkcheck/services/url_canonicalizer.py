"""Turn seeds and raw hrefs into absolute URLs keyed for visited-tracking."""
import logging
from typing import Optional
from urllib.parse import urlparse

from linkcheck.domain.crawl_state import CrawlState
from linkcheck.exceptions import HttpFetchError, UrlParseError
from linkcheck.services.error_log import ErrorLog
from linkcheck.services.fetcher import Fetcher

logger = logging.getLogger(__name__)

PROBE_SCHEMES = ("https", "http")


def remove_leading_slash(site: str) -> str:
    """Strip every leading '/' from `site`."""
    return site.lstrip("/")


def _parse(url: str):
    try:
        return urlparse(url)
    except ValueError as e:
        raise UrlParseError(url, str(e)) from e


def canonicalise_child(raw: str, scheme: str, domain: str) -> str:
    """Resolve a raw href against the crawl's scheme and domain.

    - "./" is the site root.
    - A leading-slash path loses all its leading slashes and is placed
      under the domain.
    - A relative path is placed under the domain.
    - A URL with both scheme and host is returned unchanged.
    """
    canonical = raw.strip()

    if canonical == "./":
        canonical = f"{scheme}://{domain}"
    elif canonical.startswith("/"):
        canonical = remove_leading_slash(canonical)

    parsed = _parse(canonical)

    if not parsed.netloc:
        canonical = f"{domain}/{canonical}"
    if not parsed.scheme:
        canonical = f"{scheme}://{canonical}"

    return canonical


class UrlCanonicalizer:
    """Canonicalises the crawl seed and the links found on its pages.

    The seed decides the crawl's CrawlState; a seed without a scheme is
    probed with HEAD requests over https and then http.
    """

    def __init__(self, fetcher: Fetcher, error_log: Optional[ErrorLog] = None):
        self.fetcher = fetcher
        self.error_log = error_log or ErrorLog()

    def canonicalise_root(self, seed: str) -> tuple[str, CrawlState]:
        site = seed.strip()
        parsed = _parse(site)
        if parsed.scheme and parsed.netloc:
            return site, CrawlState(scheme=parsed.scheme, domain=parsed.netloc)

        candidate = site
        for scheme in PROBE_SCHEMES:
            candidate = f"{scheme}://{site}"
            try:
                code = self.fetcher.head_status(candidate)
            except HttpFetchError as e:
                self.error_log.write("unable to use %s scheme for %s, %s", scheme, site, e.original)
                continue
            if code == 200:
                logger.info("Resolved seed %s to %s", site, candidate)
                return candidate, CrawlState.from_url(candidate)
            logger.debug("Probe %s -> status %s", candidate, code)

        logger.warning("Could not establish a scheme for %s", site)
        return candidate, CrawlState()

    def canonicalise_child(self, raw: str, state: CrawlState) -> str:
        return canonicalise_child(raw, state.scheme, state.domain)
