"""Create/edit form lifecycle shared by every entity kind.

A FormSession stages edits in its own field state and only touches the
ConfigStore in commit(), after validation has passed. Validation reports
every violated rule at once so they can be shown together.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

from karl_tui.config.store import ConfigStore
from karl_tui.config.types import Configuration
from karl_tui.tui.fields.choice import ComboBox, Selector, Toggle
from karl_tui.tui.fields.text import TextArea, TextInput
from karl_tui.tui.keys import KeyEvent

T = TypeVar("T")

FieldState = TextInput | TextArea | Selector | ComboBox | Toggle


class FormMode(Enum):
    CREATE = auto()
    EDIT = auto()


@dataclass(frozen=True)
class FormField:
    """One labeled input of a form."""

    label: str
    state: FieldState
    required: bool = False


class FormClosedError(RuntimeError):
    """Raised when a committed or cancelled session is used again."""


class FormSession(ABC, Generic[T]):
    """Staged create/edit session for one entity.

    Subclasses declare their fields, how to validate them against the
    current configuration, how to build the entity, and how to write it.
    """

    entity_name: str = "entry"

    def __init__(self, *, mode: FormMode, original_key: str | None) -> None:
        self.mode = mode
        self.original_key = original_key
        self.focused_field = 0
        self._closed = False

    @property
    @abstractmethod
    def fields(self) -> list[FormField]:
        """Fields in focus order."""
        ...

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def focused(self) -> FormField:
        return self.fields[self.focused_field]

    @property
    def closed(self) -> bool:
        return self._closed

    def next_field(self) -> None:
        self.focused_field = (self.focused_field + 1) % self.field_count

    def prev_field(self) -> None:
        self.focused_field = (self.focused_field - 1) % self.field_count

    def handle_key(self, key: KeyEvent) -> bool:
        """Route a key to the focused field.

        Returns:
            True if the focused field consumed the key
        """
        consumed = self.focused.state.handle_key(key)
        if consumed:
            self.on_field_changed(self.focused_field)
        return consumed

    def on_field_changed(self, index: int) -> None:
        """Recompute fields that depend on the field at `index`."""

    @abstractmethod
    def key(self) -> str:
        """Key the entity will be stored under."""
        ...

    @abstractmethod
    def validate(self, config: Configuration) -> list[str]:
        """Check every rule and return all error messages (empty when valid)."""
        ...

    @abstractmethod
    def build(self) -> T:
        """Convert the field states into the entity. Only valid after validate()."""
        ...

    @abstractmethod
    def _write(self, store: ConfigStore, entity: T) -> None: ...

    def commit(self, store: ConfigStore) -> list[str]:
        """Validate and, if valid, write the entity to the store.

        Returns:
            Validation errors. When non-empty nothing was written and the
            session stays open; when empty the session is closed.

        Raises:
            FormClosedError: If the session was already committed or cancelled
        """
        if self._closed:
            raise FormClosedError(f"{self.entity_name} form is closed")
        errors = self.validate(store.config)
        if errors:
            return errors
        self._write(store, self.build())
        self._closed = True
        return []

    def cancel(self) -> None:
        """Discard the session. The store is never touched."""
        self._closed = True

    def describe_commit(self) -> str:
        action = "Created" if self.mode == FormMode.CREATE else "Updated"
        return f"{action} {self.entity_name} '{self.key()}'"
