"""Interaction modes and the mutable pager state they live in.

Each mode is its own class so a search mode always carries its query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .query_input import QueryInput


@dataclass(frozen=True)
class Paging:
    """Plain scrolling."""


@dataclass(frozen=True)
class Editing:
    """Search prompt open; ``query`` is edited live and searched as typed."""

    query: QueryInput = field(default_factory=QueryInput)

    @property
    def term(self) -> str:
        return self.query.value


@dataclass(frozen=True)
class Active:
    """Committed search; ``base`` is the position where it was committed."""

    term: str
    base: int


@dataclass(frozen=True)
class Exiting:
    """Terminal mode; the main loop stops once entered."""


Mode = Union[Paging, Editing, Active, Exiting]


@dataclass
class PagerState:
    position: int = 0
    viewport_height: int = 1
    mode: Mode = field(default_factory=Paging)
    dirty: bool = True

    @property
    def exiting(self) -> bool:
        return isinstance(self.mode, Exiting)

    @property
    def highlight_term(self) -> str | None:
        """Term to highlight in the main pane, if a search is open."""
        if isinstance(self.mode, (Editing, Active)):
            return self.mode.term
        return None
