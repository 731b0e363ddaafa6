"""A background log writer fed through a queue.

Every message is appended to the log file as
``<sequence number> - <local time> - <message>``; numbering restarts at
zero each time the writer is started.
"""

from __future__ import annotations

import itertools
import queue
import threading
import time
from pathlib import Path
from typing import Optional, TextIO, Union

DEFAULT_LOG_FILE = "gateway.log"
MSG_SIZE = 100

_STOP = object()


class LogProcess:
    """Writes log messages to a file from a dedicated worker."""

    def __init__(
        self, path: Union[str, Path] = DEFAULT_LOG_FILE, message_size: int = MSG_SIZE
    ) -> None:
        if message_size < 2:
            raise ValueError("message_size must be at least 2")
        self.path = Path(path)
        self.message_size = message_size
        self._queue: Optional[queue.Queue] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def start(self) -> "LogProcess":
        """Open the log file for appending and start the worker."""
        if self._thread is not None:
            raise RuntimeError("log writer is already running")
        log = open(self.path, "a", encoding="utf-8")
        messages: queue.Queue = queue.Queue()
        self._queue = messages
        self._thread = threading.Thread(
            target=self._run, args=(log, messages), daemon=True
        )
        self._thread.start()
        return self

    @staticmethod
    def _run(log: TextIO, messages: queue.Queue) -> None:
        with log:
            for number in itertools.count():
                msg = messages.get()
                if msg is _STOP:
                    return
                stamp = time.ctime(time.time())[:24]
                log.write(f"{number} - {stamp} - {msg}\n")
                log.flush()

    def write(self, msg: str) -> None:
        """Queue a message, cut to message_size - 1 characters; ignored when stopped."""
        if self._queue is None:
            return
        text = msg.split("\0", 1)[0][: self.message_size - 1]
        self._queue.put(text)

    def stop(self) -> None:
        """Flush the queued messages, close the file and end the worker."""
        if self._thread is None or self._queue is None:
            return
        self._queue.put(_STOP)
        self._thread.join()
        self._thread = None
        self._queue = None

    def __enter__(self) -> "LogProcess":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()