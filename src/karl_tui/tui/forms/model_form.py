"""Create/edit form for model aliases."""

from __future__ import annotations

from karl_tui.config.store import ConfigStore
from karl_tui.config.types import Configuration, ModelEntry
from karl_tui.tui.fields.choice import ComboBox, Selector, Toggle
from karl_tui.tui.fields.text import TextInput
from karl_tui.tui.forms.base import FormField, FormMode, FormSession
from karl_tui.tui.forms.providers import models_for_provider

ALIAS_FIELD = 0
PROVIDER_FIELD = 1
MODEL_FIELD = 2
DEFAULT_FIELD = 3


class ModelForm(FormSession[ModelEntry]):
    """Alias, provider, model id and "set as default".

    The model-id suggestions follow the provider: every change to the
    provider field rebuilds them from the static provider table and selects
    the first one.
    """

    entity_name = "model"

    def __init__(
        self,
        *,
        mode: FormMode,
        original_key: str | None,
        alias: TextInput,
        provider: Selector,
        model: ComboBox,
        set_as_default: Toggle,
        original: ModelEntry,
    ) -> None:
        super().__init__(mode=mode, original_key=original_key)
        self.alias = alias
        self.provider = provider
        self.model = model
        self.set_as_default = set_as_default
        self._original = original
        self._options_provider = provider.selected_value()

    @classmethod
    def new_create(cls, providers: list[str]) -> ModelForm:
        provider = Selector(providers)
        return cls(
            mode=FormMode.CREATE,
            original_key=None,
            alias=TextInput(placeholder="e.g., fast, smart, claude"),
            provider=provider,
            model=ComboBox(models_for_provider(provider.selected_value() or "")),
            set_as_default=Toggle("Set as default model"),
            original=ModelEntry(),
        )

    @classmethod
    def new_edit(
        cls, alias: str, entry: ModelEntry, *, is_default: bool, providers: list[str]
    ) -> ModelForm:
        # Keep the entry's provider selectable even if it is not configured
        options = providers if entry.provider in providers else [entry.provider, *providers]
        provider = Selector(options)
        provider.select_by_value(entry.provider)
        return cls(
            mode=FormMode.EDIT,
            original_key=alias,
            alias=TextInput(alias),
            provider=provider,
            model=ComboBox(models_for_provider(entry.provider), entry.model),
            set_as_default=Toggle("Set as default model", is_default),
            original=entry,
        )

    @property
    def fields(self) -> list[FormField]:
        return [
            FormField("Alias", self.alias, required=True),
            FormField("Provider", self.provider, required=True),
            FormField("Model ID", self.model, required=True),
            FormField(self.set_as_default.label, self.set_as_default),
        ]

    def on_field_changed(self, index: int) -> None:
        if index == PROVIDER_FIELD and self.provider.selected_value() != self._options_provider:
            self.update_model_options()

    def update_model_options(self) -> None:
        self._options_provider = self.provider.selected_value()
        self.model.reset_options(models_for_provider(self._options_provider or ""))

    def key(self) -> str:
        return self.alias.value.strip()

    def validate(self, config: Configuration) -> list[str]:
        errors: list[str] = []
        key = self.key()
        if not key:
            errors.append("Alias is required")
        elif key in config.models and key != self.original_key:
            errors.append(f"Model '{key}' already exists")
        if self.provider.is_empty():
            errors.append("No providers configured")
        if not self.model.value.strip():
            errors.append("Model is required")
        return errors

    def build(self) -> ModelEntry:
        return self._original.model_copy(
            update={
                "provider": self.provider.selected_value() or "",
                "model": self.model.value.strip(),
            }
        )

    def _write(self, store: ConfigStore, entity: ModelEntry) -> None:
        store.put_model(self.key(), entity, replaces=self.original_key)
        if self.set_as_default.value:
            store.set_default_model(self.key())
