"""Domain objects for linkcheck - explicit re-exports to satisfy linters."""
from .status import Status as Status
from .result import Result as Result
from .check_speed import CheckSpeed as CheckSpeed
from .crawl_state import CrawlState as CrawlState
from .http_response import HttpResponse as HttpResponse
from .visited_tracker import VisitedTracker as VisitedTracker
from .in_flight_counter import InFlightCounter as InFlightCounter

__all__ = [
    "Status",
    "Result",
    "CheckSpeed",
    "CrawlState",
    "HttpResponse",
    "VisitedTracker",
    "InFlightCounter",
]
