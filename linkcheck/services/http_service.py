import requests
from typing import Callable
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError

from linkcheck.domain.http_response import HttpResponse
from linkcheck.exceptions import HttpFetchError


def is_timeout(exc: BaseException) -> bool:
    """True when a requests failure was caused by a deadline being exceeded.

    Read timeouts hit while consuming the body surface as ConnectionError
    wrapping a urllib3 timeout, so the wrapped arguments are inspected too.
    """
    if isinstance(exc, (requests.exceptions.Timeout, Urllib3TimeoutError)):
        return True
    for arg in getattr(exc, "args", ()):
        if isinstance(arg, Urllib3TimeoutError):
            return True
        reason = getattr(arg, "reason", None)
        if isinstance(reason, Urllib3TimeoutError):
            return True
    return False


class HttpService:
    """
    HTTP client wrapper for checking and fetching links.

    Requires http_client callable with the signature of `requests.request`,
    which keeps tests free of patching. `requests.request` opens a fresh
    session per call, so one service can be shared by every crawl thread.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: float = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def _headers(self) -> dict:
        return {"User-Agent": self.user_agent, "Accept": "*/*"}

    def _request(self, method: str, url: str):
        try:
            return self.http_client(
                method,
                url,
                headers=self._headers(),
                timeout=self.timeout,
                allow_redirects=True,
            )
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e, timed_out=is_timeout(e)) from e

    def head_status(self, url: str) -> int:
        """Issue a HEAD request and return its status code."""
        resp = self._request("HEAD", url)
        resp.close()
        return resp.status_code

    def get(self, url: str) -> HttpResponse:
        """Fetch URL and return its status code and body bytes."""
        resp = self._request("GET", url)
        return HttpResponse(resp.status_code, resp.content)
