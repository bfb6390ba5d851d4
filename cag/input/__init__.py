"""Keyboard side of the pager: raw key decoding and per-mode key maps."""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, KEY_EOF, KEY_UNKNOWN, _PENDING_BYTES, read_key
from .key_handlers import PagerKeyHandler, handle_key
from .keymap import KeyBinding, KeyMap

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KEY_EOF",
    "KEY_UNKNOWN",
    "KeyBinding",
    "KeyMap",
    "PagerKeyHandler",
    "handle_key",
]
