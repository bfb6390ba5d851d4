"""Frame composition for the pager screen.

Layout, top to bottom: context panel (commit header, at most seven rows
including its separator), main pane, search box while searching, and a
reverse-video status line. The main pane height is reported back so
scrolling can use it.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

from .ansi import clip_ansi_line, display_width
from .query_input import QueryInput
from .search import highlight_segments, match_spans
from .state import Active, Editing, Mode
from .syntax import colorize_line, sanitize_terminal_text
from .viewport import scroll_percent

CONTEXT_PANEL_MAX_ROWS = 7
SEARCH_BOX_ROWS = 3
STATUS_ROWS = 1
HIGHLIGHT_START = "\033[1m"
HIGHLIGHT_END = "\033[22m"
RESET = "\033[0m"


@dataclass(frozen=True)
class RenderContext:
    mode: Mode
    lines: Sequence[str]
    context: Sequence[str] | None
    highlight_term: str | None
    width: int
    height: int
    position: int
    total_lines: int
    input_complete: bool
    style: str = "monokai"
    no_color: bool = False


@dataclass(frozen=True)
class PaneLayout:
    context_rows: int
    main_rows: int
    search_rows: int


def compute_layout(height: int, context_len: int, searching: bool) -> PaneLayout:
    """Split ``height`` rows between panels; the main pane keeps at least one."""
    search_rows = SEARCH_BOX_ROWS if searching else 0
    available = max(1, height - STATUS_ROWS - search_rows)
    context_rows = min(CONTEXT_PANEL_MAX_ROWS, context_len + 1) if context_len > 0 else 0
    context_rows = max(0, min(context_rows, available - 1))
    # A separator alone is not worth a row.
    if context_rows == 1:
        context_rows = 0
    return PaneLayout(
        context_rows=context_rows,
        main_rows=max(1, available - context_rows),
        search_rows=search_rows,
    )


def _plain_line(line: str) -> str:
    return sanitize_terminal_text(line.rstrip("\r"))


def format_main_line(line: str, highlight_term: str | None, style: str, no_color: bool) -> str:
    """Style one main-pane line: bold search matches, otherwise diff colors."""
    text = _plain_line(line)
    if highlight_term:
        spans = match_spans(highlight_term, text)
        if spans:
            return "".join(
                f"{HIGHLIGHT_START}{segment}{HIGHLIGHT_END}" if highlighted else segment
                for segment, highlighted in highlight_segments(text, spans)
            )
    if no_color:
        return text
    return colorize_line(text, style)


def _format_query(query: QueryInput, show_cursor: bool) -> str:
    if not show_cursor:
        return query.value
    before = query.value[: query.cursor]
    at = query.value[query.cursor : query.cursor + 1] or " "
    after = query.value[query.cursor + 1 :]
    return f"{before}\033[7m{at}\033[27m{after}"


def _search_box_rows(mode: Mode, width: int) -> list[str]:
    inner = max(0, width - 2)
    title = "─ Search "
    top = "┌" + (title + "─" * max(0, inner - len(title)))[:inner] + "┐"
    if isinstance(mode, Editing):
        body = _format_query(mode.query, show_cursor=True)
    elif isinstance(mode, Active):
        body = mode.term
    else:
        body = ""
    body = clip_ansi_line(body, inner)
    pad = " " * max(0, inner - display_width(body))
    middle = f"│{body}{RESET}{pad}│"
    bottom = "└" + "─" * inner + "┘"
    return [top, middle, bottom]


def _status_text(ctx: RenderContext, main_rows: int) -> str:
    end = min(ctx.total_lines, ctx.position + main_rows)
    total = f"{ctx.total_lines}" if ctx.input_complete else f"{ctx.total_lines}+"
    percent = scroll_percent(ctx.position, ctx.total_lines, main_rows)
    if isinstance(ctx.mode, Editing):
        hint = "Enter search  Esc cancel"
    elif isinstance(ctx.mode, Active):
        hint = "n/N next/prev  / new search  Esc close"
    else:
        hint = "/ search  q quit"
    left = f" {ctx.position + 1}-{end}/{total} {percent:5.1f}%"
    usable = max(1, ctx.width - 1)
    gap = max(1, usable - len(left) - len(hint))
    return f"{left}{' ' * gap}{hint}"[:usable]


def build_frame(ctx: RenderContext) -> tuple[str, int]:
    """Compose the full screen; return the escape stream and main-pane rows."""
    width = max(1, ctx.width)
    line_width = max(1, width - 1)
    searching = isinstance(ctx.mode, (Editing, Active))
    context_lines = list(ctx.context or ())
    layout = compute_layout(ctx.height, len(context_lines), searching)

    out: list[str] = ["\033[H\033[J"]
    if layout.context_rows:
        for line in context_lines[: layout.context_rows - 1]:
            text = clip_ansi_line(_plain_line(line), line_width)
            out.append(f"\033[2m{text}{RESET}\r\n")
        out.append("═" * line_width + "\r\n")

    for row in range(layout.main_rows):
        if row < len(ctx.lines):
            text = format_main_line(ctx.lines[row], ctx.highlight_term, ctx.style, ctx.no_color)
            text = clip_ansi_line(text, line_width)
            out.append(text)
            if "\033" in text:
                out.append(RESET)
        out.append("\r\n")

    if layout.search_rows:
        for row_text in _search_box_rows(ctx.mode, line_width):
            out.append(row_text + "\r\n")

    out.append("\033[7m")
    out.append(_status_text(ctx, layout.main_rows))
    out.append(RESET)
    return "".join(out), layout.main_rows


def render_frame(ctx: RenderContext, out_fd: int) -> int:
    """Draw one frame to ``out_fd`` and return the main-pane height."""
    payload, main_rows = build_frame(ctx)
    os.write(out_fd, payload.encode("utf-8", errors="replace"))
    return main_rows
