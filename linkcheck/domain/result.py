"""Link check result data model."""
from typing import NamedTuple, Optional

from linkcheck.domain.status import Status


class Result(NamedTuple):
    """Outcome of checking a single URL.

    Emitted exactly once per crawled URL and never mutated afterwards.
    """
    url: str
    referring_site: str
    response_code: Optional[int] = None
    status: Status = Status.UNVISITED
    problem: Optional[str] = None

    @property
    def is_up(self) -> bool:
        return self.status is Status.UP
