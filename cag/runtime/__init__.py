"""Pager bootstrap (``run_pager``) and the event loop it drives."""

from .app import run_pager
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

__all__ = [
    "run_pager",
    "run_main_loop",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
]
