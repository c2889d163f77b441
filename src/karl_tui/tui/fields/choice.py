"""Choice-style field state: fixed choices, suggested values, and boolean toggles."""

from __future__ import annotations

from karl_tui.tui.fields.text import TextInput
from karl_tui.tui.keys import KeyEvent


class Selector:
    """Single choice from an ordered list of options, with wraparound."""

    def __init__(self, options: list[str]) -> None:
        self.options = list(options)
        self.selected = 0

    def select_by_value(self, value: str) -> None:
        """Select `value` if present; otherwise leave the selection alone."""
        if value in self.options:
            self.selected = self.options.index(value)

    def next(self) -> None:
        if self.options:
            self.selected = (self.selected + 1) % len(self.options)

    def previous(self) -> None:
        if self.options:
            self.selected = (self.selected - 1) % len(self.options)

    def selected_value(self) -> str | None:
        if 0 <= self.selected < len(self.options):
            return self.options[self.selected]
        return None

    def handle_key(self, key: KeyEvent) -> bool:
        if not self.options:
            return False
        if key.key in ("left", "h"):
            self.previous()
            return True
        if key.key in ("right", "l", "enter", "space"):
            self.next()
            return True
        return False

    def is_empty(self) -> bool:
        return not self.options


class ComboBox:
    """Free text with a list of suggested values.

    Left/Right cycle through the suggestions and copy the chosen one into the
    text; typing edits the text directly, so values outside the list can be
    entered too.
    """

    def __init__(self, options: list[str], value: str | None = None) -> None:
        self.selector = Selector(options)
        first = self.selector.selected_value()
        self.text = TextInput(value if value is not None else (first or ""))
        if value is not None:
            self.selector.select_by_value(value)

    @property
    def options(self) -> list[str]:
        return self.selector.options

    @property
    def value(self) -> str:
        return self.text.value

    def reset_options(self, options: list[str]) -> None:
        """Replace the suggestions and select the first one."""
        self.selector = Selector(options)
        self.text = TextInput(self.selector.selected_value() or "")

    def handle_key(self, key: KeyEvent) -> bool:
        if key.key in ("left", "right"):
            if self.selector.is_empty():
                return False
            if key.key == "left":
                self.selector.previous()
            else:
                self.selector.next()
            self.text = TextInput(self.selector.selected_value() or "")
            return True
        return self.text.handle_key(key)


class Toggle:
    """Boolean field flipped by Space or Enter."""

    def __init__(self, label: str, value: bool = False) -> None:
        self.label = label
        self.value = value

    def toggle(self) -> None:
        self.value = not self.value

    def handle_key(self, key: KeyEvent) -> bool:
        if key.key in ("space", "enter"):
            self.toggle()
            return True
        return False

    def display(self) -> str:
        return "[x]" if self.value else "[ ]"
