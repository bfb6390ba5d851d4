"""Locate the commit header enclosing the current scroll position.

A block begins at a line matching the start pattern and ends just before
the next boundary line (another commit or the first ``diff --git``). When
the boundary has not streamed in yet, everything above the scroll
position counts as part of the block.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import RegexBuildError

logger = logging.getLogger(__name__)

GIT_COMMIT_START_PATTERN = r"^commit [0-9a-fA-F]{40}"
GIT_COMMIT_BOUNDARY_PATTERN = r"^(commit [0-9a-fA-F]{40}|diff --git)"


class InputType(enum.Enum):
    GIT = "git"


@dataclass(frozen=True)
class ContextRange:
    """Inclusive line-index range of a block (without the trailing line)."""

    start: int
    end: int


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise RegexBuildError(f"Could not parse regular expression {pattern!r}: {exc}") from exc


class ContextFinder:
    """Find the block around a position using start/boundary patterns."""

    def __init__(self, start_pattern: str, boundary_pattern: str) -> None:
        self.start = _compile(start_pattern)
        self.boundary = _compile(boundary_pattern)

    @classmethod
    def for_input_type(cls, input_type: InputType) -> ContextFinder:
        if input_type is InputType.GIT:
            logger.debug("Creating git context finder")
            return cls(GIT_COMMIT_START_PATTERN, GIT_COMMIT_BOUNDARY_PATTERN)
        raise ValueError(f"unsupported input type: {input_type!r}")

    def is_block_start(self, line: str) -> bool:
        return self.start.match(line) is not None

    def is_block_boundary(self, line: str) -> bool:
        return self.boundary.match(line) is not None

    def _start_line_num(self, lines: Sequence[str], position: int) -> int | None:
        for idx in range(min(position, len(lines)) - 1, -1, -1):
            if self.is_block_start(lines[idx]):
                return idx
        return None

    def _boundary_line_num(self, lines: Sequence[str], position: int, start: int) -> int | None:
        # The start line may itself match the boundary pattern; skip it.
        for idx in range(start + 1, min(position, len(lines))):
            if self.is_block_boundary(lines[idx]):
                return idx
        return None

    def find_range(self, lines: Sequence[str], position: int) -> ContextRange | None:
        """Return the block enclosing ``position`` or ``None``.

        Positions 0 and 1 never have context.
        """
        if position <= 1:
            return None
        start = self._start_line_num(lines, position)
        if start is None:
            return None
        boundary = self._boundary_line_num(lines, position, start)
        if boundary is None:
            return ContextRange(start=start, end=position - 1)
        return ContextRange(start=start, end=boundary - 1)

    def get_context_range(self, lines: Sequence[str], position: int) -> ContextRange | None:
        """Return the displayed range: the block plus one trailing line.

        The trailing line is clamped to the last stored line.
        """
        found = self.find_range(lines, position)
        if found is None:
            return None
        end = min(found.end + 1, len(lines) - 1)
        if end < found.start:
            return None
        return ContextRange(start=found.start, end=end)

    def get_context(self, lines: Sequence[str], position: int) -> Sequence[str] | None:
        """Return the context lines to show above the main pane."""
        shown = self.get_context_range(lines, position)
        if shown is None:
            return None
        return lines[shown.start : shown.end + 1]
