import logging
import sys
import threading
from typing import Optional, TextIO

logger = logging.getLogger(__name__)


class ErrorLog:
    """User-facing diagnostic channel of a checker.

    Lines go to `stream` (standard error when None, resolved per write) and
    are also passed to the module logger at debug level. Silent mode drops
    the stream output only.
    """

    def __init__(self, stream: Optional[TextIO] = None, silent: bool = False):
        self._stream = stream
        self.silent = silent
        self._lock = threading.Lock()

    def write(self, message: str, *args) -> None:
        text = message % args if args else message
        logger.debug(text)
        if self.silent:
            return
        stream = self._stream if self._stream is not None else sys.stderr
        with self._lock:
            stream.write(text.rstrip("\n") + "\n")
            stream.flush()
