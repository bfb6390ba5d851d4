"""Per-mode key maps for the pager state machine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    keys: tuple[str, ...]
    action: Callable[[], None]


class KeyMap:
    """Key token to action table for one interaction mode.

    A key may only be bound once per map; tokens without a binding are
    left to the caller.
    """

    def __init__(self, *bindings: KeyBinding) -> None:
        self._actions: dict[str, Callable[[], None]] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> None:
        for key in binding.keys:
            if key in self._actions:
                raise ValueError(f"key {key!r} is already bound")
            self._actions[key] = binding.action

    def __contains__(self, key: str) -> bool:
        return key in self._actions

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; return whether there was one."""
        action = self._actions.get(key)
        if action is None:
            return False
        action()
        return True
