"""Link status values and the HTTP status code classification table."""
from enum import Enum
from typing import NamedTuple, Optional


class Status(Enum):
    UNVISITED = 0
    UP = 1
    DOWN = 2
    RATE_LIMITED = 3
    NON_STANDARD = 4

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    def __str__(self) -> str:
        return self.label


_STATUS_LABELS = {
    Status.UNVISITED: "Invalid Status",
    Status.UP: "Up",
    Status.DOWN: "Down",
    Status.RATE_LIMITED: "RateLimited",
    Status.NON_STANDARD: "Unable to verify",
}

HTTP_STATUS_MAP = {
    200: Status.UP,
    201: Status.UP,
    202: Status.UP,
    429: Status.RATE_LIMITED,
    999: Status.NON_STANDARD,
}

# Hosts known to answer 999 to automated clients while being reachable.
# This is a heuristic, not HTTP semantics.
BOT_BLOCKING_HOSTS = ("linkedin.com",)

NON_OK_PROBLEM = "Non OK response"
RATE_LIMIT_PROBLEM = "Site rate limit exceeded"
BOT_BLOCKED_PROBLEM = "linkedin is up, but rejects http requests"
NON_STANDARD_PROBLEM = "Non standard error returned by external service"
TIMEOUT_PROBLEM = "Client timeout exceeded while awaiting response"


class Classification(NamedTuple):
    status: Status
    problem: Optional[str] = None


def status_for_code(code: int) -> Status:
    """Look up the status for a response code; anything unlisted is Down."""
    return HTTP_STATUS_MAP.get(code, Status.DOWN)


def classify_status(code: int, host: str = "") -> Classification:
    """Classify a completed HTTP round trip by its response code.

    `host` is only consulted for the 999 special case.
    """
    status = status_for_code(code)
    if status is Status.UP:
        return Classification(Status.UP)
    if status is Status.RATE_LIMITED:
        return Classification(Status.RATE_LIMITED, RATE_LIMIT_PROBLEM)
    if status is Status.NON_STANDARD:
        if any(h in (host or "").lower() for h in BOT_BLOCKING_HOSTS):
            return Classification(Status.UP, BOT_BLOCKED_PROBLEM)
        return Classification(Status.NON_STANDARD, NON_STANDARD_PROBLEM)
    return Classification(Status.DOWN, NON_OK_PROBLEM)
