"""Main interactive event loop for the pager.

Each iteration ingests at most one batch, draws when something changed,
then waits a bounded time for a key so streamed lines and terminal resizes
are picked up without a key press.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..context_finder import ContextFinder
from ..input import KEY_EOF, PagerKeyHandler
from ..line_store import LineStore
from ..render import RenderContext
from ..state import Exiting, PagerState
from ..streaming import InputStreamer
from ..terminal import TerminalController
from ..viewport import visible_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 120


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected I/O used by ``run_main_loop``.

    ``read_key`` returns ``""`` when its wait elapses and ``KEY_EOF`` once the
    keyboard is gone. ``render`` returns the main-pane height it drew.
    """

    read_key: Callable[[int], str]
    render: Callable[[RenderContext], int]
    terminal_size: Callable[[], tuple[int, int]]


def _draw(
    state: PagerState,
    store: LineStore,
    context_finder: ContextFinder,
    callbacks: RuntimeLoopCallbacks,
    size: tuple[int, int],
    style: str,
    no_color: bool,
) -> bool:
    """Draw one frame; return whether the pane height changed under it."""
    columns, rows = size
    sliced_rows = state.viewport_height
    render_context = RenderContext(
        mode=state.mode,
        lines=visible_window(store.lines, state.position, sliced_rows),
        context=context_finder.get_context(store.lines, state.position),
        highlight_term=state.highlight_term,
        width=columns,
        height=rows,
        position=state.position,
        total_lines=len(store),
        input_complete=store.is_final,
        style=style,
        no_color=no_color,
    )
    state.viewport_height = max(1, callbacks.render(render_context))
    return state.viewport_height != sliced_rows


def run_main_loop(
    state: PagerState,
    store: LineStore,
    streamer: InputStreamer,
    context_finder: ContextFinder,
    terminal: TerminalController,
    callbacks: RuntimeLoopCallbacks,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    *,
    style: str = "monokai",
    no_color: bool = False,
) -> None:
    """Run the pager until a quit key or keyboard EOF switches to exiting.

    Engine errors (``GetLinesError``, ``SearchTermError``) propagate; the
    ``raw_mode`` context restores the terminal on the way out.
    """
    key_handler = PagerKeyHandler(state, store.lines)
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while not state.exiting:
            was_final = store.is_final
            if store.ingest(streamer) or store.is_final != was_final:
                state.dirty = True

            size = callbacks.terminal_size()
            if size != last_size:
                last_size = size
                state.dirty = True

            if state.dirty:
                # The renderer decides the pane height; refill a pane that grew.
                state.dirty = _draw(state, store, context_finder, callbacks, size, style, no_color)
                if state.dirty:
                    continue

            try:
                key = callbacks.read_key(timing.key_poll_ms)
            except KeyboardInterrupt:
                continue
            if key == KEY_EOF:
                logger.debug("Keyboard closed")
                state.mode = Exiting()
                continue
            if not key:
                continue
            logger.debug("Key %r", key)
            key_handler.handle_key(key)

    logger.debug("Main loop finished at position %d of %d lines", state.position, len(store))
