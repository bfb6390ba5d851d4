"""Single-line editable buffer for the search prompt."""

from __future__ import annotations


def _is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class QueryInput:
    """Query text plus a cursor measured in characters."""

    def __init__(self, value: str = "", cursor: int | None = None) -> None:
        self.value = value
        self.cursor = len(value) if cursor is None else max(0, min(cursor, len(value)))

    def __repr__(self) -> str:
        return f"QueryInput(value={self.value!r}, cursor={self.cursor})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryInput):
            return NotImplemented
        return self.value == other.value and self.cursor == other.cursor

    def insert(self, text: str) -> None:
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)

    def _delete_word_before_cursor(self) -> None:
        idx = self.cursor
        while idx > 0 and self.value[idx - 1].isspace():
            idx -= 1
        while idx > 0 and not self.value[idx - 1].isspace():
            idx -= 1
        self.value = self.value[:idx] + self.value[self.cursor :]
        self.cursor = idx

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return whether it was an editing event."""
        if _is_text_key(key):
            self.insert(key)
            return True
        if key == "BACKSPACE":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
            return True
        if key == "DELETE":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
            return True
        if key == "LEFT":
            self.cursor = max(0, self.cursor - 1)
            return True
        if key == "RIGHT":
            self.cursor = min(len(self.value), self.cursor + 1)
            return True
        if key in {"HOME", "CTRL_A"}:
            self.cursor = 0
            return True
        if key in {"END", "CTRL_E"}:
            self.cursor = len(self.value)
            return True
        if key == "CTRL_U":
            self.value = self.value[self.cursor :]
            self.cursor = 0
            return True
        if key == "CTRL_K":
            self.value = self.value[: self.cursor]
            return True
        if key == "CTRL_W":
            self._delete_word_before_cursor()
            return True
        return False
