"""Exception hierarchy for the pager engine.

Engine-internal failures propagate to ``run_pager`` and end the session.
Streamer failures travel over the batch queue as values instead.
"""

from __future__ import annotations


class CagError(Exception):
    """Base class for every error raised by the pager."""


class StartupTimeoutError(CagError):
    """No initial batch arrived from the input stream in time."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Timeout while waiting for input stream ({timeout:g}s)")
        self.timeout = timeout


class StreamReadError(CagError):
    """Reading the input source failed inside the streamer thread."""


class GetLinesError(CagError):
    """Requested scroll position lies outside the line store."""

    def __init__(self, position: int, total_lines: int) -> None:
        super().__init__(f"Could not get lines to display (position {position} of {total_lines})")
        self.position = position
        self.total_lines = total_lines


class SearchTermError(CagError):
    """Search matcher could not be built for a query."""


class RegexBuildError(CagError):
    """Context pattern failed to compile."""
