"""Low-level terminal input decoding.

Reads raw bytes from the keyboard tty and translates them into key tokens.
Handles ESC-sequence timing, navigation sequences, and multi-byte UTF-8.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
KEY_EOF = "EOF"
KEY_UNKNOWN = "UNKNOWN"
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x01": "CTRL_A",
    b"\x03": "CTRL_C",
    b"\x05": "CTRL_E",
    b"\x0b": "CTRL_K",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

# Final byte of ``ESC [`` / ``ESC O`` sequences without parameters.
_CSI_LETTER_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

# First parameter of ``ESC [ <n> ~`` sequences.
_CSI_TILDE_KEYS: dict[str, str] = {
    "1": "HOME",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}

# xterm modifier parameter, as in ``ESC [ 1 ; 5 A``.
_MODIFIER_PREFIXES: dict[str, str] = {
    "2": "SHIFT_",
    "3": "ALT_",
    "5": "CTRL_",
}

_CSI_MAX_LENGTH = 16


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = bytearray(lead)
    for _ in range(_utf8_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data.extend(nxt)
    return bytes(data).decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    """Consume a whole ``ESC [ params final`` sequence and name it.

    Sequences without a token of their own come back as ``KEY_UNKNOWN`` so
    their tail bytes never leak out as separate keys.
    """
    params = bytearray()
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KEY_UNKNOWN if params else "ESC"
        if 0x40 <= part[0] <= 0x7E:
            break
        params.extend(part)
        if len(params) > _CSI_MAX_LENGTH:
            return KEY_UNKNOWN

    fields = params.decode("ascii", errors="replace").split(";")
    if part == b"~":
        key = _CSI_TILDE_KEYS.get(fields[0])
    else:
        key = _CSI_LETTER_KEYS.get(part)
    if key is None:
        return KEY_UNKNOWN

    modifier = fields[1] if len(fields) > 1 else "1"
    if modifier == "1":
        return key
    prefix = _MODIFIER_PREFIXES.get(modifier)
    if prefix is None:
        return KEY_UNKNOWN
    return prefix + key


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input and
    ``KEY_EOF`` once the fd hits end-of-file. A lone ESC is reported after
    a short grace period so it does not wait for another key press.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return KEY_EOF

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        if ch[0] >= 0xC0:
            return _read_utf8_char(fd, ch)
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is not None and final in _CSI_LETTER_KEYS:
            return _CSI_LETTER_KEYS[final]
        return "ESC"
    _PENDING_BYTES.append(seq)
    return "ESC"
