import threading
from typing import Optional


class InFlightCounter:
    """Counts dispatched-but-unfinished crawl tasks (wait-group semantics).

    `add` must be called before the task is started so the count can never
    touch zero while work is still being handed out.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._count = 0

    @property
    def count(self) -> int:
        with self._cond:
            return self._count

    def add(self, n: int = 1) -> None:
        with self._cond:
            if self._count + n < 0:
                raise ValueError("in-flight counter cannot go negative")
            self._count += n
            if self._count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the count reaches zero. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)
