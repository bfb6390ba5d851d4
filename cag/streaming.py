"""Background reader that streams input lines to the pager in batches.

The worker thread only pushes onto a queue; the main loop drains it with
one blocking receive at startup and non-blocking polls afterwards.
End of input is signaled by a close sentinel, never by an error.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from queue import Empty, Queue
from typing import BinaryIO

from .errors import StartupTimeoutError, StreamReadError

logger = logging.getLogger(__name__)

_CLOSED = object()


def decode_line(raw: bytes) -> str:
    """Strip the ``\\n`` terminator and decode with replacement characters."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class StreamPoll:
    """Outcome of one non-blocking receive.

    An empty ``lines`` list with ``closed`` false and no ``error`` means
    nothing new arrived this frame.
    """

    lines: list[str] = field(default_factory=list)
    closed: bool = False
    error: StreamReadError | None = None


class InputStreamer:
    """Read ``source`` on a daemon thread and queue batches of decoded lines."""

    def __init__(self, source: BinaryIO, batch_size: int) -> None:
        self._source = source
        self.batch_size = max(1, batch_size)
        self._queue: Queue[object] = Queue()
        self._thread: threading.Thread | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether the consumer has observed the end of the stream."""
        return self._closed

    def start(self) -> None:
        if self._thread is not None:
            return
        logger.debug("Opening channel for input reader (batch size %d)", self.batch_size)
        self._thread = threading.Thread(
            target=self._worker,
            name="cag-input-stream",
            daemon=True,
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _worker(self) -> None:
        batch: list[str] = []
        while True:
            try:
                raw = self._source.readline()
            except OSError as exc:
                logger.warning("Error reading input lines: %s", exc)
                if batch:
                    self._queue.put(batch)
                self._queue.put(StreamReadError(f"Could not read input: {exc}"))
                self._queue.put(_CLOSED)
                return
            if not raw:
                break
            batch.append(decode_line(raw))
            if len(batch) >= self.batch_size:
                logger.debug("Sending batch of %d lines", len(batch))
                self._queue.put(batch)
                batch = []

        if batch:
            logger.debug("Sending final batch of %d lines", len(batch))
            self._queue.put(batch)
        logger.debug("Input exhausted")
        self._queue.put(_CLOSED)

    def receive_initial(self, timeout: float) -> list[str]:
        """Block for the first batch, at most ``timeout`` seconds.

        Returns an empty list when the input ended without any lines.
        """
        try:
            message = self._queue.get(timeout=timeout)
        except Empty:
            raise StartupTimeoutError(timeout) from None
        if message is _CLOSED:
            self._closed = True
            return []
        if isinstance(message, StreamReadError):
            raise message
        assert isinstance(message, list)
        return message

    def poll(self) -> StreamPoll:
        """Receive at most one queued message without blocking."""
        if self._closed:
            return StreamPoll(closed=True)
        try:
            message = self._queue.get_nowait()
        except Empty:
            return StreamPoll()
        if message is _CLOSED:
            self._closed = True
            logger.debug("Input stream disconnected")
            return StreamPoll(closed=True)
        if isinstance(message, StreamReadError):
            return StreamPoll(error=message)
        assert isinstance(message, list)
        return StreamPoll(lines=message)


__all__ = [
    "InputStreamer",
    "StreamPoll",
    "decode_line",
]
