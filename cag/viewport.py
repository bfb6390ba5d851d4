"""Scroll arithmetic for the main pane.

Positions are bottom-anchored: scrolling down never moves past the point
where the last ``viewport_height`` lines fill the pane.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import GetLinesError

logger = logging.getLogger(__name__)


def max_start(total_lines: int, viewport_height: int) -> int:
    """Return the largest scroll position that keeps the pane full."""
    return max(0, total_lines - viewport_height)


def clamp_down(position: int, step: int, total_lines: int, viewport_height: int) -> int:
    """Scroll down by ``step`` without passing :func:`max_start`."""
    return min(position + step, max_start(total_lines, viewport_height))


def clamp_up(position: int, step: int) -> int:
    """Scroll up by ``step``, floored at zero."""
    return max(0, position - step)


def visible_window(lines: Sequence[str], position: int, viewport_height: int) -> Sequence[str]:
    """Return the screenful of lines starting at ``position``.

    When the store cannot fill the pane the window stops one line short of
    the end. Raises :class:`GetLinesError` when ``position`` is not an index
    of ``lines``.
    """
    total = len(lines)
    if position < 0 or position >= total:
        raise GetLinesError(position, total)
    if total > position + viewport_height:
        return lines[position : position + viewport_height]
    logger.debug("Window at %d reaches end of %d lines", position, total)
    return lines[position : total - 1]


def scroll_percent(position: int, total_lines: int, viewport_height: int) -> float:
    if total_lines <= 0:
        return 0.0
    ceiling = max_start(total_lines, max(1, viewport_height))
    if ceiling <= 0:
        return 100.0
    return (max(0, min(position, ceiling)) / ceiling) * 100.0
