"""Input events as seen by the editor core.

The core never touches Textual event objects. The driver converts each
`textual.events.Key` into a KeyEvent, which keeps Textual's key names
("enter", "escape", "shift+tab", "ctrl+s", ...) and the printable
character, if any.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual import events


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    Attributes:
        key: Textual key name (e.g. "a", "slash", "enter", "ctrl+s")
        character: Printable character produced by the key, if any
    """

    key: str
    character: str | None

    @staticmethod
    def named(key: str) -> KeyEvent:
        """Create an event for a non-printing key such as "enter" or "ctrl+s"."""
        return KeyEvent(key=key, character=None)

    @staticmethod
    def typed(character: str) -> KeyEvent:
        """Create an event for a printable character."""
        if character == " ":
            return KeyEvent(key="space", character=" ")
        return KeyEvent(key=character, character=character)

    @staticmethod
    def from_textual(event: events.Key) -> KeyEvent:
        return KeyEvent(key=event.key, character=event.character)

    @property
    def char(self) -> str | None:
        """The printable character, or None for control and navigation keys."""
        if self.character is None or "ctrl+" in self.key:
            return None
        if len(self.character) != 1 or not self.character.isprintable():
            return None
        return self.character
