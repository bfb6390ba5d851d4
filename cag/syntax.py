"""Line sanitization and diff coloring for the main pane.

Pygments is imported on first use to keep startup quick.
Coloring is done per line because lines arrive in batches.
"""

from __future__ import annotations

import re
from functools import lru_cache

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\t", "\n"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


@lru_cache(maxsize=None)
def _diff_highlighter(style: str):
    from pygments.formatters import Terminal256Formatter
    from pygments.lexers import DiffLexer
    from pygments.styles import get_all_styles

    if style not in set(get_all_styles()):
        style = "monokai"
    return DiffLexer(stripnl=False, ensurenl=False), Terminal256Formatter(style=style)


@lru_cache(maxsize=4096)
def colorize_line(line: str, style: str = "monokai") -> str:
    """Return ``line`` colored as unified-diff / git-log output."""
    if not line:
        return line
    from pygments import highlight

    lexer, formatter = _diff_highlighter(style)
    return highlight(line, lexer, formatter).rstrip("\n")
