import queue
import threading
from typing import Iterator, Optional

from linkcheck.domain.result import Result
from linkcheck.exceptions import ResultStreamClosedError

_CLOSED = object()


class ResultStream:
    """FIFO channel of results from crawl tasks to a single consumer.

    Bounded by `maxsize` (0 means unbounded): producers block while it is
    full. Iteration ends once the stream has been closed and drained.
    Closing never blocks; the queue keeps one slot beyond `maxsize` for the
    close marker.
    """

    def __init__(self, maxsize: int = 0):
        self.maxsize = maxsize
        self._slots = threading.BoundedSemaphore(maxsize) if maxsize > 0 else None
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=maxsize + 1 if maxsize > 0 else 0)
        self._lock = threading.Lock()
        self._closed = False
        self._finished = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, result: Result) -> None:
        with self._lock:
            if self._closed:
                raise ResultStreamClosedError(f"result for {result.url} emitted after close")
        if self._slots is not None:
            self._slots.acquire()
        self._queue.put(result)

    def close(self) -> None:
        """Close the stream. Safe only once every producer has finished."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put_nowait(_CLOSED)

    def get(self, timeout: Optional[float] = None) -> Result:
        """Return the next result; raises StopIteration once drained.

        Raises queue.Empty if `timeout` elapses first.
        """
        if self._finished:
            raise StopIteration
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            self._finished = True
            raise StopIteration
        if self._slots is not None:
            self._slots.release()
        return item

    def __iter__(self) -> Iterator[Result]:
        return self

    def __next__(self) -> Result:
        return self.get()

    def drain(self) -> list[Result]:
        return list(self)
