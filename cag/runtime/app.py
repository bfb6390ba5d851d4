"""Runtime composition layer for the pager.

Starts the input streamer, waits for the first batch, then wires the line
store, context finder, terminal, and renderer into the main loop.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from functools import partial
from typing import BinaryIO

from ..config import PagerConfig
from ..context_finder import ContextFinder, InputType
from ..errors import CagError
from ..input import read_key
from ..line_store import LineStore
from ..logging_setup import tracing
from ..render import render_frame
from ..state import PagerState
from ..streaming import InputStreamer
from ..terminal import TerminalController, open_keyboard_tty
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

logger = logging.getLogger(__name__)

KEYBOARD_TTY_PATH = "/dev/tty"


def _terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


def start_streamer(source: BinaryIO, config: PagerConfig, rows: int) -> InputStreamer:
    """Start reading ``source`` with batches sized from the terminal height."""
    streamer = InputStreamer(source, batch_size=config.batch_factor * max(1, rows))
    streamer.start()
    return streamer


def run_pager(
    source: BinaryIO,
    config: PagerConfig,
    *,
    out_fd: int | None = None,
    keyboard_tty_path: str = KEYBOARD_TTY_PATH,
) -> None:
    """Page ``source`` interactively until the user quits.

    Returns without drawing anything when the input is empty. Pager errors
    are logged and re-raised after the terminal has been restored.
    """
    if out_fd is None:
        out_fd = sys.stdout.fileno()

    with tracing(config):
        try:
            _run(source, config, out_fd, keyboard_tty_path)
        except CagError as exc:
            logger.error("Pager failed: %s", exc)
            raise


def _run(source: BinaryIO, config: PagerConfig, out_fd: int, keyboard_tty_path: str) -> None:
    columns, rows = _terminal_size()
    streamer = start_streamer(source, config, rows)
    initial = streamer.receive_initial(config.startup_timeout)
    if not initial and streamer.closed:
        logger.debug("Input was empty, nothing to page")
        return

    store = LineStore(initial)
    context_finder = ContextFinder.for_input_type(InputType.GIT)
    state = PagerState(viewport_height=max(1, rows))
    logger.debug("Starting pager with %d initial lines on %dx%d", len(store), columns, rows)

    with open_keyboard_tty(keyboard_tty_path) as keyboard_fd:
        terminal = TerminalController(stdin_fd=keyboard_fd, stdout_fd=out_fd)
        callbacks = RuntimeLoopCallbacks(
            read_key=partial(_read_key_with_timeout, keyboard_fd),
            render=partial(_render, out_fd=out_fd),
            terminal_size=_terminal_size,
        )
        run_main_loop(
            state,
            store,
            streamer,
            context_finder,
            terminal,
            callbacks,
            RuntimeLoopTiming(),
            style=config.style,
            no_color=config.no_color,
        )


def _read_key_with_timeout(fd: int, timeout_ms: int) -> str:
    return read_key(fd, timeout_ms=timeout_ms)


def _render(render_context, *, out_fd: int) -> int:
    return render_frame(render_context, out_fd)


def copy_through(source: BinaryIO, out_fd: int) -> None:
    """Write ``source`` unchanged to ``out_fd`` (non-interactive mode)."""
    while True:
        chunk = source.read(64 * 1024)
        if not chunk:
            return
        view = memoryview(chunk)
        while view:
            written = os.write(out_fd, view)
            view = view[written:]
