"""Custom exceptions for linkcheck services."""


class LinkcheckError(Exception):
    """Base class for linkcheck errors."""


class ConfigError(LinkcheckError, ValueError):
    """Raised when a checker is built from invalid configuration."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid {setting}: {reason}")


class HttpFetchError(LinkcheckError):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception, timed_out: bool = False):
        self.url = url
        self.original = original
        self.timed_out = timed_out
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class UrlParseError(LinkcheckError):
    """Raised when a raw link cannot be turned into an absolute URL."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"unable to canonicalise url {url!r}: {reason}")


class LinkExtractionError(LinkcheckError):
    """Raised when a response body cannot be parsed for links."""


class RateLimitWaitError(LinkcheckError):
    """Raised when a rate limiter token cannot be obtained in time."""


class ResultStreamClosedError(LinkcheckError):
    """Raised when a result is emitted after the stream was closed."""
