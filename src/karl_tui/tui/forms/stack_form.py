"""Create/edit form for stacks."""

from __future__ import annotations

import math

from karl_tui.config.store import ConfigStore
from karl_tui.config.types import Configuration, StackEntry
from karl_tui.tui.fields.choice import Toggle
from karl_tui.tui.fields.text import TextArea, TextInput
from karl_tui.tui.forms.base import FormField, FormMode, FormSession

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0
MAX_TIMEOUT_MS = 2**64 - 1
MAX_TOKENS_LIMIT = 2**32 - 1


def _parse_uint(text: str) -> int | None:
    """Parse a base-10 unsigned integer; None if `text` is not one."""
    if not text.isascii() or not text.isdigit():
        return None
    return int(text)


def _parse_float(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def _optional(text: str) -> str | None:
    stripped = text.strip()
    return stripped if stripped else None


class StackForm(FormSession[StackEntry]):
    """Stack key plus the display name and nine optional stack settings.

    Empty optional fields become "no value" in the committed stack, never
    zero or an empty string. A present but unparsable number is an error.
    A new stack with no display name is named after its key; an edited
    stack keeps whatever display name the field holds.
    """

    entity_name = "stack"

    def __init__(
        self, *, mode: FormMode, original_key: str | None, entry: StackEntry
    ) -> None:
        super().__init__(mode=mode, original_key=original_key)
        self.name = TextInput(original_key or "", placeholder="e.g., codex-architect")
        self.display_name = TextInput(entry.name or "", placeholder="Display name (optional)")
        self.extends = TextInput(entry.extends or "", placeholder="Base stack to extend (optional)")
        self.model = TextInput(entry.model or "", placeholder="Model alias (optional)")
        self.temperature = TextInput(
            _format_number(entry.temperature), placeholder="0.0 - 2.0 (optional)"
        )
        self.timeout = TextInput(_format_number(entry.timeout), placeholder="Timeout in ms (optional)")
        self.max_tokens = TextInput(
            _format_number(entry.max_tokens), placeholder="Max tokens (optional)"
        )
        self.skill = TextInput(entry.skill or "", placeholder="Skill name (optional)")
        self.context = TextArea(entry.context or "", placeholder="Multi-line context (optional)")
        self.context_file = TextInput(
            entry.context_file or "", placeholder="Path to context file (optional)"
        )
        self.unrestricted = Toggle("Unrestricted mode", bool(entry.unrestricted))
        self._original = entry

    @classmethod
    def new_create(cls) -> StackForm:
        return cls(mode=FormMode.CREATE, original_key=None, entry=StackEntry())

    @classmethod
    def new_edit(cls, name: str, entry: StackEntry) -> StackForm:
        return cls(mode=FormMode.EDIT, original_key=name, entry=entry)

    @property
    def fields(self) -> list[FormField]:
        return [
            FormField("Name", self.name, required=True),
            FormField("Display name", self.display_name),
            FormField("Extends", self.extends),
            FormField("Model", self.model),
            FormField("Temperature", self.temperature),
            FormField("Timeout (ms)", self.timeout),
            FormField("Max tokens", self.max_tokens),
            FormField("Skill", self.skill),
            FormField("Context", self.context),
            FormField("Context file", self.context_file),
            FormField(self.unrestricted.label, self.unrestricted),
        ]

    def key(self) -> str:
        return self.name.value.strip()

    def validate(self, config: Configuration) -> list[str]:
        errors: list[str] = []
        key = self.key()
        if not key:
            errors.append("Name is required")
        elif key in config.stacks and key != self.original_key:
            errors.append(f"Stack '{key}' already exists")

        temperature = self.temperature.value.strip()
        if temperature:
            value = _parse_float(temperature)
            if value is None:
                errors.append("Temperature must be a number")
            elif not MIN_TEMPERATURE <= value <= MAX_TEMPERATURE:
                errors.append(
                    f"Temperature must be between {MIN_TEMPERATURE} and {MAX_TEMPERATURE}"
                )

        timeout = self.timeout.value.strip()
        if timeout:
            value = _parse_uint(timeout)
            if value is None or value > MAX_TIMEOUT_MS:
                errors.append("Timeout must be a non-negative integer")

        max_tokens = self.max_tokens.value.strip()
        if max_tokens:
            value = _parse_uint(max_tokens)
            if value is None or value > MAX_TOKENS_LIMIT:
                errors.append("Max tokens must be a non-negative integer")

        return errors

    def build(self) -> StackEntry:
        temperature = self.temperature.value.strip()
        timeout = self.timeout.value.strip()
        max_tokens = self.max_tokens.value.strip()
        context = self.context.text
        display_name = _optional(self.display_name.value)
        if display_name is None and self.mode == FormMode.CREATE:
            display_name = self.key()
        return self._original.model_copy(
            update={
                "name": display_name,
                "extends": _optional(self.extends.value),
                "model": _optional(self.model.value),
                "temperature": _parse_float(temperature) if temperature else None,
                "timeout": _parse_uint(timeout) if timeout else None,
                "max_tokens": _parse_uint(max_tokens) if max_tokens else None,
                "skill": _optional(self.skill.value),
                "context": context if context.strip() else None,
                "context_file": _optional(self.context_file.value),
                "unrestricted": True if self.unrestricted.value else None,
            }
        )

    def _write(self, store: ConfigStore, entity: StackEntry) -> None:
        store.put_stack(self.key(), entity, replaces=self.original_key)


def _format_number(value: float | int | None) -> str:
    return "" if value is None else str(value)
