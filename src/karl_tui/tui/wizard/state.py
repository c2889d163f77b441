"""First-run setup wizard.

A linear sequence of steps:

    Welcome -> SelectProvider -> (AuthenticateOAuth | AuthenticateApiKey)
            -> CreateModel -> Confirm

Enter/Y move forward, Backspace/N move back, Esc abandons the wizard.
The wizard only holds state and reports what the application should do
next; it never writes configuration or runs processes itself.
"""

from __future__ import annotations

from enum import Enum, auto

from karl_tui.config.types import ModelEntry, ProviderEntry
from karl_tui.tui.fields.choice import Selector
from karl_tui.tui.fields.text import TextInput
from karl_tui.tui.forms.providers import PROVIDER_OPTIONS, ProviderOption
from karl_tui.tui.keys import KeyEvent

DEFAULT_WIZARD_ALIAS = "fast"


class InitStep(Enum):
    WELCOME = auto()
    SELECT_PROVIDER = auto()
    AUTHENTICATE_OAUTH = auto()
    AUTHENTICATE_API_KEY = auto()
    CREATE_MODEL = auto()
    CONFIRM = auto()


class OAuthStatus(Enum):
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    SUCCESS = auto()
    FAILED = auto()


class WizardOutcome(Enum):
    """What the application must do after a wizard key press."""

    NONE = auto()
    REQUEST_LOGIN = auto()
    COMPLETE = auto()
    CANCEL = auto()


class InitWizard:
    """State of the setup wizard."""

    def __init__(self) -> None:
        self.step = InitStep.WELCOME
        self.provider_index = 0
        self.api_key = TextInput(placeholder="Enter your API key")
        self.model_alias = TextInput(DEFAULT_WIZARD_ALIAS)
        self.model_selector = Selector(self.selected_provider.model_ids)
        self.oauth_status = OAuthStatus.NOT_STARTED
        self.error_message: str | None = None
        # CreateModel focus: 0 = alias, 1 = model selector
        self.model_focused_field = 0

    @property
    def selected_provider(self) -> ProviderOption:
        return PROVIDER_OPTIONS[self.provider_index]

    def next_provider(self) -> None:
        self.provider_index = (self.provider_index + 1) % len(PROVIDER_OPTIONS)
        self._update_model_options()

    def prev_provider(self) -> None:
        self.provider_index = (self.provider_index - 1) % len(PROVIDER_OPTIONS)
        self._update_model_options()

    def _update_model_options(self) -> None:
        self.model_selector = Selector(self.selected_provider.model_ids)

    def selected_model(self) -> str:
        return self.model_selector.selected_value() or self.selected_provider.default_models[0][1]

    def _auth_step(self) -> InitStep:
        if self.selected_provider.auth_type == "oauth":
            return InitStep.AUTHENTICATE_OAUTH
        return InitStep.AUTHENTICATE_API_KEY

    def handle_key(self, key: KeyEvent) -> WizardOutcome:
        if key.key == "escape":
            return WizardOutcome.CANCEL

        if self.step == InitStep.WELCOME:
            if key.key == "enter":
                self.step = InitStep.SELECT_PROVIDER
        elif self.step == InitStep.SELECT_PROVIDER:
            self._handle_select_provider(key)
        elif self.step == InitStep.AUTHENTICATE_OAUTH:
            return self._handle_oauth(key)
        elif self.step == InitStep.AUTHENTICATE_API_KEY:
            self._handle_api_key(key)
        elif self.step == InitStep.CREATE_MODEL:
            self._handle_create_model(key)
        elif self.step == InitStep.CONFIRM:
            if key.key == "enter" or key.char in ("y", "Y"):
                return WizardOutcome.COMPLETE
            if key.key == "backspace" or key.char in ("n", "N"):
                self.step = InitStep.CREATE_MODEL
        return WizardOutcome.NONE

    def _handle_select_provider(self, key: KeyEvent) -> None:
        if key.key in ("up", "k"):
            self.prev_provider()
        elif key.key in ("down", "j"):
            self.next_provider()
        elif key.key == "enter":
            self.step = self._auth_step()
        elif key.key == "backspace":
            self.step = InitStep.WELCOME

    def _handle_oauth(self, key: KeyEvent) -> WizardOutcome:
        if key.key == "enter":
            self.oauth_status = OAuthStatus.IN_PROGRESS
            self.error_message = None
            return WizardOutcome.REQUEST_LOGIN
        if key.char in ("s", "S"):
            self.step = InitStep.CREATE_MODEL
        elif key.key == "backspace":
            self.step = InitStep.SELECT_PROVIDER
            self.oauth_status = OAuthStatus.NOT_STARTED
        return WizardOutcome.NONE

    def _handle_api_key(self, key: KeyEvent) -> None:
        if key.key == "enter":
            if self.api_key.value.strip():
                self.step = InitStep.CREATE_MODEL
            else:
                self.error_message = "API key is required"
        elif key.key == "backspace" and self.api_key.is_empty():
            self.step = InitStep.SELECT_PROVIDER
        elif self.api_key.handle_key(key):
            self.error_message = None

    def _handle_create_model(self, key: KeyEvent) -> None:
        if key.key in ("tab", "shift+tab"):
            self.model_focused_field = 1 - self.model_focused_field
        elif key.key == "enter":
            if self.model_alias.value.strip():
                self.step = InitStep.CONFIRM
            else:
                self.error_message = "Model alias is required"
        elif key.key == "backspace" and (
            self.model_focused_field == 1 or self.model_alias.is_empty()
        ):
            self.step = self._auth_step()
        elif self.model_focused_field == 0:
            if self.model_alias.handle_key(key):
                self.error_message = None
        elif key.key in ("up", "k"):
            self.model_selector.previous()
        elif key.key in ("down", "j"):
            self.model_selector.next()

    def oauth_complete(self, success: bool) -> None:
        """Record the result of the external login flow."""
        if success:
            self.oauth_status = OAuthStatus.SUCCESS
            self.error_message = None
            self.step = InitStep.CREATE_MODEL
        else:
            self.oauth_status = OAuthStatus.FAILED
            self.error_message = "OAuth authentication failed"

    def provider_entry(self) -> ProviderEntry:
        provider = self.selected_provider
        if provider.auth_type == "oauth":
            return ProviderEntry(provider_type=provider.provider_type, auth_type="oauth")
        return ProviderEntry(
            provider_type=provider.provider_type,
            base_url=provider.base_url,
            api_key=self.api_key.value.strip(),
        )

    def model_entry(self) -> ModelEntry:
        return ModelEntry(provider=self.selected_provider.key, model=self.selected_model())
