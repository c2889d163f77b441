"""Editable text state for single-line inputs and the multi-line context field."""

from __future__ import annotations

from karl_tui.tui.keys import KeyEvent


class TextInput:
    """Single-line text with a cursor.

    Supports insertion, Backspace/Delete, Left/Right/Home/End, and the
    readline-style Ctrl+A, Ctrl+E, Ctrl+U, Ctrl+K and Ctrl+W.
    """

    def __init__(self, value: str = "", *, placeholder: str = "") -> None:
        self.value = value
        self.cursor = len(value)
        self.placeholder = placeholder

    def handle_key(self, key: KeyEvent) -> bool:
        """Apply a key press.

        Returns:
            True if the key was consumed (the value or cursor may have changed)
        """
        char = key.char
        if char is not None:
            self.value = self.value[: self.cursor] + char + self.value[self.cursor :]
            self.cursor += 1
            return True

        if key.key == "backspace":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
        elif key.key == "delete":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        elif key.key == "left":
            self.cursor = max(0, self.cursor - 1)
        elif key.key == "right":
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key.key in ("home", "ctrl+a"):
            self.cursor = 0
        elif key.key in ("end", "ctrl+e"):
            self.cursor = len(self.value)
        elif key.key == "ctrl+u":
            self.value = self.value[self.cursor :]
            self.cursor = 0
        elif key.key == "ctrl+k":
            self.value = self.value[: self.cursor]
        elif key.key == "ctrl+w":
            self._delete_word_backward()
        else:
            return False
        return True

    def _delete_word_backward(self) -> None:
        head = self.value[: self.cursor]
        start = max(head.rfind(" "), head.rfind("\t")) + 1
        self.value = self.value[:start] + self.value[self.cursor :]
        self.cursor = start

    def clear(self) -> None:
        self.value = ""
        self.cursor = 0

    def is_empty(self) -> bool:
        return not self.value


class TextArea:
    """Multi-line text; Enter starts a new line.

    Each line is edited through a TextInput; Up/Down move between lines
    keeping the column where possible.
    """

    def __init__(self, text: str = "", *, placeholder: str = "") -> None:
        self.lines = [TextInput(line) for line in text.split("\n")] if text else [TextInput()]
        self.row = len(self.lines) - 1
        self.placeholder = placeholder

    @property
    def text(self) -> str:
        return "\n".join(line.value for line in self.lines)

    def handle_key(self, key: KeyEvent) -> bool:
        current = self.lines[self.row]
        if key.key == "enter":
            tail = current.value[current.cursor :]
            current.value = current.value[: current.cursor]
            self.row += 1
            new_line = TextInput(tail)
            new_line.cursor = 0
            self.lines.insert(self.row, new_line)
            return True
        if key.key == "backspace" and current.cursor == 0 and self.row > 0:
            previous = self.lines[self.row - 1]
            join_at = len(previous.value)
            previous.value += current.value
            previous.cursor = join_at
            del self.lines[self.row]
            self.row -= 1
            return True
        if key.key in ("up", "down"):
            target = self.row - 1 if key.key == "up" else self.row + 1
            if 0 <= target < len(self.lines):
                column = current.cursor
                self.row = target
                self.lines[target].cursor = min(column, len(self.lines[target].value))
            return True
        return current.handle_key(key)
