"""Case-insensitive substring search over the line store.

Queries are literal text; the matcher escapes them before compiling.
Results are line indices, plus per-line spans for highlighting.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterable, Sequence

from .errors import SearchTermError

logger = logging.getLogger(__name__)


class SearchDirection(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


def build_matcher(patterns: Iterable[str]) -> re.Pattern[str]:
    """Compile literal ``patterns`` into one case-insensitive alternation.

    Longer patterns come first so overlapping alternatives prefer the
    longest literal at a given offset.
    """
    literals = sorted(set(patterns), key=len, reverse=True)
    try:
        return re.compile("|".join(re.escape(literal) for literal in literals), re.IGNORECASE)
    except (re.error, OverflowError, RecursionError) as exc:
        raise SearchTermError(f"Error with search term: {exc}") from exc


def search(
    term: str,
    position: int,
    lines: Sequence[str],
    direction: SearchDirection,
) -> int | None:
    """Return the index of the nearest line containing ``term``.

    Forward scans start at ``position`` inclusive. Backward scans start just
    above ``position`` and walk toward the top; a position past the end is
    treated as the end.
    """
    matcher = build_matcher([term])
    if direction is SearchDirection.FORWARD:
        indices = range(max(0, position), len(lines))
    else:
        indices = range(min(position, len(lines)) - 1, -1, -1)
    for idx in indices:
        if matcher.search(lines[idx]) is not None:
            logger.debug("Search %r %s from %d found line %d", term, direction.value, position, idx)
            return idx
    logger.debug("Search %r %s from %d found nothing", term, direction.value, position)
    return None


def match_spans(term: str, line: str) -> list[tuple[int, int]]:
    """Return ordered, disjoint ``(start, end)`` offsets of ``term`` in ``line``."""
    if not term:
        return []
    matcher = build_matcher([term])
    return [match.span() for match in matcher.finditer(line) if match.end() > match.start()]


def highlight_segments(line: str, spans: Sequence[tuple[int, int]]) -> list[tuple[str, bool]]:
    """Split ``line`` into alternating plain and highlighted segments.

    Empty plain gaps are omitted; highlighted segments are never empty.
    """
    segments: list[tuple[str, bool]] = []
    cursor = 0
    for start, end in spans:
        if start > cursor:
            segments.append((line[cursor:start], False))
        segments.append((line[start:end], True))
        cursor = end
    if cursor < len(line) or not segments:
        segments.append((line[cursor:], False))
    return segments
