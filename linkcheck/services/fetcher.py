from __future__ import annotations

from typing import Protocol

from linkcheck.domain.http_response import HttpResponse


class Fetcher(Protocol):
    """Check and fetch URLs over HTTP.

    Kept small so the crawl engine can run against fakes in tests.
    Implementations raise `HttpFetchError` for transport failures and
    return any completed round trip, whatever its status code.
    """

    def head_status(self, url: str) -> int: ...

    def get(self, url: str) -> HttpResponse: ...
