import threading
from typing import Set


class VisitedTracker:
    """
    Tracks which URLs have been claimed during a crawl.

    Shared by every crawl task of one check, so all access goes through a
    single lock. `claim` is the only safe way to decide whether to fetch a
    URL: the membership test and the insert happen in one critical section,
    so two tasks that discover the same link concurrently cannot both win.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: Set[str] = set()

    def claim(self, url: str) -> bool:
        """Mark `url` visited; return True only for the first caller."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been visited."""
        with self._lock:
            return url in self._visited

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
