"""Key-event state machine for paging and incremental search.

Each mode owns a dispatch table; keys without a binding are ignored.
Search moves only ever set the position when a match exists.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..search import SearchDirection, search
from ..state import Active, Editing, Exiting, Mode, PagerState, Paging
from ..viewport import clamp_down, clamp_up
from .keymap import KeyBinding, KeyMap

logger = logging.getLogger(__name__)


class PagerKeyHandler:
    """Apply key tokens to ``state`` against the (growing) ``lines``."""

    def __init__(self, state: PagerState, lines: Sequence[str]) -> None:
        self.state = state
        self.lines = lines
        self._paging_keys = KeyMap(
            KeyBinding(("q", "ESC"), self._quit),
            KeyBinding(("DOWN", "j"), lambda: self._scroll_down(1)),
            KeyBinding(("UP", "k"), lambda: self._scroll_up(1)),
            KeyBinding(("PAGE_DOWN", " "), lambda: self._scroll_down(self.state.viewport_height)),
            KeyBinding(("PAGE_UP", "b"), lambda: self._scroll_up(self.state.viewport_height)),
            KeyBinding(("HOME", "g"), self._scroll_top),
            KeyBinding(("END", "G"), lambda: self._scroll_down(len(self.lines))),
            KeyBinding(("/",), self._open_search_prompt),
        )
        self._active_keys = KeyMap(
            KeyBinding(("ESC", "q"), self._close_search),
            KeyBinding(("n",), self._next_match),
            KeyBinding(("N",), self._previous_match),
            KeyBinding(("/",), self._open_search_prompt),
        )

    def _set_mode(self, mode: Mode) -> None:
        logger.debug("Mode %s -> %s", type(self.state.mode).__name__, type(mode).__name__)
        self.state.mode = mode

    def _quit(self) -> None:
        self._set_mode(Exiting())

    def _scroll_down(self, step: int) -> None:
        self.state.position = clamp_down(
            self.state.position,
            step,
            len(self.lines),
            self.state.viewport_height,
        )

    def _scroll_up(self, step: int) -> None:
        self.state.position = clamp_up(self.state.position, step)

    def _scroll_top(self) -> None:
        self.state.position = 0

    def _open_search_prompt(self) -> None:
        self._set_mode(Editing())

    def _close_search(self) -> None:
        self._set_mode(Paging())

    def _jump(self, term: str, start: int, direction: SearchDirection) -> None:
        found = search(term, start, self.lines, direction)
        if found is not None:
            self.state.position = found

    def _next_match(self) -> None:
        mode = self.state.mode
        assert isinstance(mode, Active)
        self._jump(mode.term, self.state.position + 1, SearchDirection.FORWARD)

    def _previous_match(self) -> None:
        mode = self.state.mode
        assert isinstance(mode, Active)
        self._jump(mode.term, self.state.position, SearchDirection.BACKWARD)

    def _handle_editing_key(self, mode: Editing, key: str) -> bool:
        if key == "ESC":
            self._close_search()
            return True
        if key == "ENTER":
            self._set_mode(Active(term=mode.term, base=self.state.position))
            return True
        if not mode.query.handle_key(key):
            return False
        self._jump(mode.term, self.state.position, SearchDirection.FORWARD)
        return True

    def handle_key(self, key: str) -> bool:
        """Handle one key token and return ``True`` when the pager should exit."""
        mode = self.state.mode
        if isinstance(mode, Paging):
            handled = self._paging_keys.dispatch(key)
        elif isinstance(mode, Editing):
            handled = self._handle_editing_key(mode, key)
        elif isinstance(mode, Active):
            handled = self._active_keys.dispatch(key)
        else:
            handled = False
        if handled:
            self.state.dirty = True
        return self.state.exiting


def handle_key(key: str, state: PagerState, lines: Sequence[str]) -> bool:
    """Handle one key with a throwaway handler; ``True`` means exit."""
    return PagerKeyHandler(state, lines).handle_key(key)
