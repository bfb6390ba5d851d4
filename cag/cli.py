"""Command-line front door for cag.

Parses CLI options, resolves the input source, and dispatches into the
interactive pager runtime (or copies input through when not on a tty).
"""

from __future__ import annotations

import argparse
import contextlib
import os
import sys
from pathlib import Path

from .config import DEFAULT_BATCH_FACTOR, DEFAULT_STARTUP_TIMEOUT_SECONDS, DEFAULT_STYLE, load_config
from .errors import CagError
from .runtime import run_pager
from .runtime.app import copy_through


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    """argparse type for positive durations in seconds."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cag",
        description="Page git log/diff output with the enclosing commit pinned on top.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to page. Defaults to standard input.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for diff colors.")
    parser.add_argument("--no-color", action="store_true", help="Disable diff coloring.")
    parser.add_argument("--nopager", action="store_true", help="Copy input to output without paging.")
    parser.add_argument(
        "--batch-factor",
        type=_positive_int,
        default=DEFAULT_BATCH_FACTOR,
        help="Lines per input batch, as a multiple of the terminal height.",
    )
    parser.add_argument(
        "--startup-timeout",
        type=_positive_float,
        default=DEFAULT_STARTUP_TIMEOUT_SECONDS,
        help="Seconds to wait for the first input lines.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and page the selected input.

    Exits with status 1 and a message on pager errors; the terminal has
    already been restored by then.
    """
    args = build_parser().parse_args(argv)

    with contextlib.ExitStack() as stack:
        if args.path is not None:
            path = Path(args.path)
            if not path.is_file():
                raise SystemExit(f"Path not found: {path}")
            source = stack.enter_context(path.open("rb"))
        else:
            if sys.stdin.isatty():
                raise SystemExit("cag: no input; pipe text into cag or pass a file path.")
            source = sys.stdin.buffer

        out_fd = sys.stdout.fileno()
        if args.nopager or not os.isatty(out_fd):
            copy_through(source, out_fd)
            return

        config = load_config(
            batch_factor=args.batch_factor,
            startup_timeout=args.startup_timeout,
            style=args.style,
            no_color=args.no_color,
        )
        try:
            run_pager(source, config, out_fd=out_fd)
        except CagError as exc:
            raise SystemExit(f"cag: {exc}") from exc
        except OSError as exc:
            raise SystemExit(f"cag: terminal unavailable: {exc}") from exc


if __name__ == "__main__":
    main()
