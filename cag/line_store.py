"""Append-only store of every line received from the input stream."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .streaming import InputStreamer

logger = logging.getLogger(__name__)


class LineStore:
    """Ordered lines whose indices never change once assigned."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._lines: list[str] = list(lines)
        self.is_final = False

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index):
        return self._lines[index]

    def __iter__(self):
        return iter(self._lines)

    @property
    def lines(self) -> Sequence[str]:
        """Read-only view for scans; callers must not mutate it."""
        return self._lines

    def extend(self, lines: Iterable[str]) -> int:
        """Append ``lines`` in order and return how many were added."""
        before = len(self._lines)
        self._lines.extend(lines)
        return len(self._lines) - before

    def ingest(self, streamer: InputStreamer) -> int:
        """Apply one non-blocking poll of ``streamer`` and return lines added.

        Stream errors are logged and dropped so the current frame still
        renders with whatever is already stored.
        """
        if self.is_final:
            return 0
        result = streamer.poll()
        if result.closed:
            self.is_final = True
            logger.debug("Line store final at %d lines", len(self._lines))
            return 0
        if result.error is not None:
            logger.warning("Got error receiving new lines: %s", result.error)
            return 0
        if not result.lines:
            return 0
        logger.debug("Got %d more lines", len(result.lines))
        return self.extend(result.lines)
