"""Form for adding a custom tool executable."""

from __future__ import annotations

from karl_tui.config.store import ConfigStore
from karl_tui.config.types import Configuration
from karl_tui.tui.fields.text import TextInput
from karl_tui.tui.forms.base import FormField, FormMode, FormSession


class ToolForm(FormSession[str]):
    """Single path field. Custom tools are added, never edited in place."""

    entity_name = "tool"

    def __init__(self) -> None:
        super().__init__(mode=FormMode.CREATE, original_key=None)
        self.path = TextInput(placeholder="Path to custom tool executable")

    @property
    def fields(self) -> list[FormField]:
        return [FormField("Path", self.path, required=True)]

    def key(self) -> str:
        return self.path.value.strip()

    def validate(self, config: Configuration) -> list[str]:
        path = self.key()
        if not path:
            return ["Path is required"]
        if path in config.tools.custom:
            return ["Tool already exists"]
        return []

    def build(self) -> str:
        return self.key()

    def _write(self, store: ConfigStore, entity: str) -> None:
        store.add_custom_tool(entity)

    def describe_commit(self) -> str:
        return f"Added tool '{self.key()}'"
