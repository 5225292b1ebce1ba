import sys
import threading
from typing import Optional, TextIO


class ProgressBar:
    """Percentage of dispatched crawl tasks that have started."""

    def __init__(self, output: Optional[TextIO] = None, refresh_interval: float = 0.1):
        self.output = output
        self.refresh_interval = refresh_interval
        self.total_steps = 0
        self.completed_steps = 0
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def add(self) -> None:
        with self._lock:
            self.total_steps += 1

    def completed(self) -> None:
        with self._lock:
            self.completed_steps += 1

    @property
    def percent(self) -> float:
        with self._lock:
            if self.total_steps == 0:
                return 0.0
            return 100.0 * self.completed_steps / self.total_steps

    def render(self) -> None:
        with self._lock:
            done, total = self.completed_steps, self.total_steps
        pct = 0.0 if total == 0 else 100.0 * done / total
        out = self.output if self.output is not None else sys.stdout
        out.write(f"{pct:.1f}% complete        {done} / {total}\r")
        out.flush()

    def _refresh(self) -> None:
        while not self._done.wait(self.refresh_interval):
            self.render()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._done.clear()
        self._thread = threading.Thread(target=self._refresh, name="linkcheck-progress", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._done.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self.render()
