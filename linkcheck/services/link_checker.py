import logging
import threading
from typing import Optional, TextIO, Union
from urllib.parse import urlparse

import requests

from linkcheck import config
from linkcheck.domain.check_speed import CheckSpeed, get_check_speed
from linkcheck.domain.crawl_state import CrawlState
from linkcheck.domain.in_flight_counter import InFlightCounter
from linkcheck.domain.result import Result
from linkcheck.domain.status import NON_OK_PROBLEM, TIMEOUT_PROBLEM, Status, classify_status
from linkcheck.domain.visited_tracker import VisitedTracker
from linkcheck.exceptions import (
    ConfigError,
    HttpFetchError,
    LinkExtractionError,
    RateLimitWaitError,
    UrlParseError,
)
from linkcheck.services.error_log import ErrorLog
from linkcheck.services.fetcher import Fetcher
from linkcheck.services.http_service import HttpService
from linkcheck.services.link_extractor import HtmlLinkExtractor, LinkExtractor
from linkcheck.services.link_processor import LinkProcessor
from linkcheck.services.progress_bar import ProgressBar
from linkcheck.services.rate_limiter import RateLimiter
from linkcheck.services.result_stream import ResultStream
from linkcheck.services.url_canonicalizer import UrlCanonicalizer

logger = logging.getLogger(__name__)

# Servers answering these to HEAD are asked again with GET.
HEAD_UNSUPPORTED_CODES = (405, 501)


class LinkChecker:
    """Crawls one site and reports the status of every link it finds.

    Each discovered URL is checked on its own thread. Internal pages that
    come back 200 are parsed and their links dispatched as further tasks,
    paced by the shared rate limiter. `check` returns once no task is in
    flight, after closing the result stream.

    An instance runs a single check: its visited set and result stream
    belong to that one crawl.
    """

    def __init__(
        self,
        *,
        output: Optional[TextIO] = None,
        error_log: Optional[TextIO] = None,
        buffer_size: Optional[int] = None,
        rate: Optional[float] = None,
        burst: Optional[int] = None,
        speed: Optional[Union[CheckSpeed, str]] = None,
        verbose: bool = False,
        silent: bool = False,
        progress: bool = False,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        http_service: Optional[Fetcher] = None,
        link_extractor: Optional[LinkExtractor] = None,
        rate_limiter: Optional[RateLimiter] = None,
        rate_wait_timeout: Optional[float] = None,
    ):
        buffer_size = config.BUFFER_SIZE if buffer_size is None else buffer_size
        if int(buffer_size) < 0:
            raise ConfigError("buffer_size", f"must not be negative, got {buffer_size!r}")

        self.output = output
        self.verbose = verbose
        self.error_log = ErrorLog(error_log, silent=silent)
        self.http_service = http_service or HttpService(
            user_agent or config.USER_AGENT,
            http_client=requests.request,
            timeout=timeout if timeout is not None else config.HTTP_TIMEOUT,
        )
        self.link_extractor = link_extractor or HtmlLinkExtractor()
        self.rate_limiter = rate_limiter or self._build_rate_limiter(rate, burst, speed)
        self.rate_wait_timeout = rate_wait_timeout if rate_wait_timeout is not None else config.RATE_WAIT_TIMEOUT
        self.canonicalizer = UrlCanonicalizer(self.http_service, self.error_log)
        self.link_processor = LinkProcessor(self.canonicalizer, self.error_log)
        self.progress_bar = ProgressBar(output) if progress else None

        self.state = CrawlState()
        self.visited = VisitedTracker()
        self.in_flight = InFlightCounter()
        self.results = ResultStream(maxsize=int(buffer_size))
        self._start_lock = threading.Lock()
        self._started = False
        self._reported_lock = threading.Lock()
        self._reported: set[str] = set()

    @staticmethod
    def _build_rate_limiter(rate, burst, speed) -> RateLimiter:
        if rate is not None or burst is not None:
            if rate is None or burst is None:
                raise ConfigError("rate limiter", "rate and burst must be given together")
            return RateLimiter(rate, burst)
        preset = get_check_speed(speed if speed is not None else config.DEFAULT_SPEED)
        return RateLimiter(preset.rate, preset.burst)

    @property
    def scheme(self) -> str:
        return self.state.scheme

    @property
    def domain(self) -> str:
        return self.state.domain

    def stream_results(self) -> ResultStream:
        return self.results

    def get_all_results(self) -> list[Result]:
        """Drain the stream; non-Up results only unless verbose, sorted by URL."""
        results = [r for r in self.results if self.verbose or r.status is not Status.UP]
        results.sort(key=lambda r: r.url)
        return results

    def check(self, site: str) -> None:
        """Crawl from `site` and block until every dispatched task has finished."""
        with self._start_lock:
            if self._started:
                raise RuntimeError("LinkChecker.check can only run once per instance")
            self._started = True

        if self.progress_bar is not None:
            self.progress_bar.start()
        try:
            try:
                root, self.state = self.canonicalizer.canonicalise_root(site)
            except UrlParseError as e:
                seed = site.strip()
                self._emit(Result(seed, seed, status=Status.DOWN, problem=str(e)))
                return

            logger.info("Checking %s (scheme=%s, domain=%s)", root, self.state.scheme, self.state.domain)
            if self.progress_bar is not None:
                self.progress_bar.add()
            self._dispatch(root, root)
            self.in_flight.wait()
            logger.info("Finished %s: %d urls checked", root, len(self.visited))
        finally:
            self.results.close()
            if self.progress_bar is not None:
                self.progress_bar.stop()

    def start(self, site: str) -> threading.Thread:
        """Run `check` on a background thread and return that thread."""
        thread = threading.Thread(target=self._run_check, args=(site,), name="linkcheck-check", daemon=True)
        thread.start()
        return thread

    def _run_check(self, site: str) -> None:
        try:
            self.check(site)
        except Exception as e:
            logger.exception("Check of %s failed", site)
            self.error_log.write("unable to check %s, %s", site, e)

    def _dispatch(self, url: str, referring_site: str) -> None:
        self.in_flight.add()
        try:
            thread = threading.Thread(
                target=self._run_task,
                args=(url, referring_site),
                name="linkcheck-crawl",
                daemon=True,
            )
            thread.start()
        except RuntimeError:
            self.in_flight.done()
            raise

    def _run_task(self, url: str, referring_site: str) -> None:
        try:
            if self.progress_bar is not None:
                self.progress_bar.completed()
            self.crawl(url, referring_site)
        except Exception as e:
            logger.exception("Unexpected error while checking %s", url)
            self.error_log.write("unexpected error while checking %s, %s", url, e)
            if not self._was_reported(url):
                self._emit(Result(url, referring_site, None, Status.DOWN, str(e)))
        finally:
            self.in_flight.done()

    def _was_reported(self, url: str) -> bool:
        with self._reported_lock:
            return url in self._reported

    def _emit(self, result: Result) -> None:
        with self._reported_lock:
            self._reported.add(result.url)
        logger.info("Checked %s -> %s, status %s", result.url, result.status.label, result.response_code)
        self.results.put(result)

    def _failed_result(self, url: str, referring_site: str, error: HttpFetchError) -> Result:
        if error.timed_out:
            logger.warning("Timed out checking %s", url)
            return Result(url, referring_site, None, Status.RATE_LIMITED, TIMEOUT_PROBLEM)
        logger.warning("Fetch failed for %s: %s", url, error)
        return Result(url, referring_site, None, Status.DOWN, str(error))

    def crawl(self, url: str, referring_site: str) -> None:
        """Check one URL and, for healthy internal pages, dispatch its links."""
        if not self.visited.claim(url):
            logger.debug("Skipping (visited) %s", url)
            return

        try:
            host = urlparse(url).netloc
        except ValueError as e:
            self._emit(Result(url, referring_site, None, Status.DOWN, str(e)))
            return

        response = None
        try:
            code = self.http_service.head_status(url)
            if code in HEAD_UNSUPPORTED_CODES:
                logger.debug("HEAD not supported by %s (status %s), using GET", url, code)
                response = self.http_service.get(url)
                code = response.status_code
        except HttpFetchError as e:
            self._emit(self._failed_result(url, referring_site, e))
            return

        verdict = classify_status(code, host)
        if verdict.status is not Status.UP or verdict.problem:
            self._emit(Result(url, referring_site, code, verdict.status, verdict.problem))
            return

        if not self.state.is_internal(url):
            self._emit(Result(url, referring_site, code, Status.UP))
            return

        if response is None:
            try:
                response = self.http_service.get(url)
            except HttpFetchError as e:
                self._emit(self._failed_result(url, referring_site, e))
                return

        if response.status_code != 200:
            self._emit(Result(url, referring_site, response.status_code, Status.DOWN, NON_OK_PROBLEM))
            return

        self._emit(Result(url, referring_site, response.status_code, Status.UP))
        self._expand(url, response.body)

    def _expand(self, page_url: str, body: bytes) -> None:
        try:
            hrefs = self.link_extractor.extract(body)
        except LinkExtractionError as e:
            self.error_log.write("unable to generate site list for %s, %s", page_url, e)
            return

        for link in self.link_processor.process(hrefs, self.state):
            if link.error is not None:
                if self.visited.claim(link.url):
                    self._emit(Result(link.url, page_url, None, Status.DOWN, link.error))
                continue

            if self.visited.is_visited(link.url):
                continue

            try:
                self.rate_limiter.wait(self.rate_wait_timeout)
            except RateLimitWaitError as e:
                self.error_log.write("not checking %s, %s", link.url, e)
                continue

            if self.progress_bar is not None:
                self.progress_bar.add()
            self._dispatch(link.url, page_url)


def check_site_links(site: str, **options) -> ResultStream:
    """Start checking `site` in the background and return its result stream.

    Invalid options raise ConfigError here; everything that goes wrong
    during the crawl ends up in the stream or the error log.
    """
    checker = LinkChecker(**options)
    checker.start(site)
    return checker.stream_results()
