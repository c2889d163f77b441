"""Editor state and the operations key handlers invoke on it.

Application is the single context object threaded through every key
handler. It owns the ConfigStore, one FilteredCollection per browsable
section, the modal contexts, and the status line. It has no knowledge of
Textual; the driver feeds it KeyEvents and reads its state to render.
"""

from __future__ import annotations

import logging

from karl_tui.config.paths import ConfigPaths
from karl_tui.config.store import ConfigStore
from karl_tui.config.types import BUILTIN_TOOLS
from karl_tui.discovery.logic import discover_hooks, discover_skills, discover_stacks
from karl_tui.discovery.types import HookInfo, SkillInfo, StackItem
from karl_tui.gateway.karl_cli.abc import KarlCli
from karl_tui.gateway.karl_cli.types import CliStatus
from karl_tui.tui.cli_status import CliInfoFetcher
from karl_tui.tui.data.types import ModelItem, ProviderItem, ToolItem
from karl_tui.tui.dialogs.confirm import ConfirmDialog, PendingAction, PendingActionKind
from karl_tui.tui.effects import Effect, LoginRequested
from karl_tui.tui.fields.text import TextInput
from karl_tui.tui.filtering.collection import FilteredCollection
from karl_tui.tui.filtering.logic import (
    hook_matches,
    model_matches,
    skill_matches,
    stack_matches,
    tool_matches,
)
from karl_tui.tui.forms.model_form import ModelForm
from karl_tui.tui.forms.stack_form import StackForm
from karl_tui.tui.forms.tool_form import ToolForm
from karl_tui.tui.handlers.confirm import handle_confirm_key
from karl_tui.tui.handlers.form import handle_form_key
from karl_tui.tui.handlers.normal import handle_normal_key
from karl_tui.tui.handlers.search import handle_search_key
from karl_tui.tui.handlers.wizard import handle_wizard_key
from karl_tui.tui.keys import KeyEvent
from karl_tui.tui.modal.controller import ModalController, ModalKind, SearchModal
from karl_tui.tui.views.types import Section, View, get_section_config
from karl_tui.tui.wizard.state import InitWizard

logger = logging.getLogger(__name__)


class Application:
    """State of one editor session.

    Attributes:
        store: Owner of the in-memory configuration
        paths: Config file and discovery root locations
        cli: External karl CLI gateway
        section: Section currently shown
        view: List or detail view within the section
        modals: Open modal contexts (wizard, confirm, form, search)
        status_message: One-line feedback shown at the bottom, if any
        should_quit: Set when the driver should exit
        cli_status: Latest result of the background `karl info` fetch
    """

    def __init__(
        self,
        *,
        store: ConfigStore,
        paths: ConfigPaths,
        cli: KarlCli,
        init_mode: bool = False,
    ) -> None:
        self.store = store
        self.paths = paths
        self.cli = cli
        self.section = Section.SETTINGS
        self.view = View.LIST
        self.modals = ModalController()
        self.status_message: str | None = None
        self.should_quit = False
        self.cli_status = CliStatus.loading()

        self.models: FilteredCollection[ModelItem] = FilteredCollection()
        self.stacks: FilteredCollection[StackItem] = FilteredCollection()
        self.skills: FilteredCollection[SkillInfo] = FilteredCollection()
        self.tools: FilteredCollection[ToolItem] = FilteredCollection()
        self.hooks: FilteredCollection[HookInfo] = FilteredCollection()
        self.providers: list[ProviderItem] = []
        self.search_queries: dict[Section, str] = {}

        self._fetcher: CliInfoFetcher | None = None
        self._effect: Effect | None = None

        if init_mode:
            self.modals.open(InitWizard())
        else:
            self.refresh_all()
            self.refresh_cli_info()

    @property
    def dirty(self) -> bool:
        return self.store.dirty

    @property
    def is_wizard_mode(self) -> bool:
        return self.modals.is_open(ModalKind.WIZARD)

    @property
    def cli_fetcher(self) -> CliInfoFetcher | None:
        """The fetch in flight, if any."""
        return self._fetcher

    # Input dispatch

    def handle_key(self, key: KeyEvent) -> None:
        """Route a key to the highest-precedence open context.

        Exactly one handler sees the key. Unrecognized keys are ignored.
        The status line only reports on the latest key.
        """
        self.status_message = None
        match self.modals.active():
            case ModalKind.WIZARD:
                handle_wizard_key(self, key)
            case ModalKind.CONFIRM:
                handle_confirm_key(self, key)
            case ModalKind.FORM:
                handle_form_key(self, key)
            case ModalKind.SEARCH:
                handle_search_key(self, key)
            case None:
                handle_normal_key(self, key)

    # Lists

    def collection(self, section: Section) -> FilteredCollection | None:
        """The browsable list for a section; Settings has none."""
        match section:
            case Section.MODELS:
                return self.models
            case Section.STACKS:
                return self.stacks
            case Section.SKILLS:
                return self.skills
            case Section.TOOLS:
                return self.tools
            case Section.HOOKS:
                return self.hooks
            case Section.SETTINGS:
                return None

    def refresh_all(self) -> None:
        """Rebuild every list from the store and the filesystem.

        Selections reset to the first item; retained search queries are
        applied again.
        """
        self._refresh_models()
        self._refresh_stacks()
        self.skills.replace_all(discover_skills(self.paths))
        self._refresh_tools()
        self.hooks.replace_all(discover_hooks(self.paths))
        self.providers = [
            ProviderItem(name=name, entry=entry)
            for name, entry in sorted(self.store.config.providers.items())
        ]
        for section in self.search_queries:
            self._apply_query(section)

    def _refresh_models(self) -> None:
        config = self.store.config
        self.models.replace_all(
            [
                ModelItem(alias=alias, entry=entry, is_default=alias == config.default_model)
                for alias, entry in sorted(config.models.items())
            ]
        )

    def _refresh_stacks(self) -> None:
        self.stacks.replace_all(discover_stacks(self.store.config, self.paths))

    def _refresh_tools(self) -> None:
        tools = self.store.config.tools
        builtins = [
            ToolItem(name=name, enabled=name in tools.enabled, is_builtin=True)
            for name in BUILTIN_TOOLS
        ]
        custom = [ToolItem(name=path, enabled=True, is_builtin=False) for path in tools.custom]
        self.tools.replace_all(builtins + custom)

    def move_selection(self, delta: int) -> None:
        collection = self.collection(self.section)
        if collection is None:
            return
        if delta > 0:
            collection.next()
        else:
            collection.previous()

    def switch_section(self, section: Section) -> None:
        self.section = section
        self.view = View.LIST

    def open_detail(self) -> None:
        self.view = View.DETAIL

    def close_detail(self) -> None:
        self.view = View.LIST

    # Search

    def start_search(self) -> None:
        section_config = get_section_config(self.section)
        if not section_config.searchable:
            return
        query = TextInput(
            self.search_queries.get(self.section, ""),
            placeholder=f"Search {section_config.display_name.lower()}...",
        )
        self.modals.open(SearchModal(section=self.section, query=query))

    def update_search(self) -> None:
        """Re-filter the searched section from the query being typed."""
        search = self.modals.search
        if search is None:
            return
        self.search_queries[search.section] = search.query.value
        self._apply_query(search.section)

    def finish_search(self) -> None:
        """Close the search box, keeping the filter."""
        self.modals.close(ModalKind.SEARCH)

    def cancel_search(self) -> None:
        """Close the search box and show the unfiltered list."""
        search = self.modals.search
        if search is None:
            return
        self.modals.close(ModalKind.SEARCH)
        self.search_queries.pop(search.section, None)
        collection = self.collection(search.section)
        if collection is not None:
            collection.clear_filter()

    def _apply_query(self, section: Section) -> None:
        query = self.search_queries.get(section, "")
        match section:
            case Section.MODELS:
                self.models.apply_filter(model_matches(query))
            case Section.STACKS:
                self.stacks.apply_filter(stack_matches(query))
            case Section.SKILLS:
                self.skills.apply_filter(skill_matches(query))
            case Section.TOOLS:
                self.tools.apply_filter(tool_matches(query))
            case Section.HOOKS:
                self.hooks.apply_filter(hook_matches(query))
            case Section.SETTINGS:
                pass

    # Persistence and quitting

    def save(self) -> None:
        try:
            self.store.save()
        except OSError as e:
            logger.debug("Saving %s failed: %s", self.store.source_path, e)
            self.status_message = f"Save failed: {e}"
            return
        self.status_message = "Config saved"

    def request_quit(self) -> None:
        """Quit, asking first when there are unsaved changes."""
        if not self.dirty:
            self.should_quit = True
            return
        self.modals.open(
            ConfirmDialog(
                "Unsaved Changes",
                "You have unsaved changes. Quit anyway?",
                PendingAction.quit(),
            )
        )

    # Tools

    def toggle_selected_tool(self) -> None:
        item = self.tools.selected()
        if item is None or not item.is_builtin:
            return
        position = self.tools.selection
        self.store.set_tool_enabled(item.name, not item.enabled)
        self._refresh_tools()
        if Section.TOOLS in self.search_queries:
            self._apply_query(Section.TOOLS)
        if position is not None:
            self.tools.select(position)

    # Forms

    def provider_names(self) -> list[str]:
        return sorted(self.store.config.providers)

    def start_create(self) -> None:
        if not get_section_config(self.section).can_create:
            return
        match self.section:
            case Section.MODELS:
                self.modals.open(ModelForm.new_create(self.provider_names()))
            case Section.STACKS:
                self.modals.open(StackForm.new_create())
            case Section.TOOLS:
                self.modals.open(ToolForm())
            case _:
                pass

    def start_edit(self) -> None:
        if not get_section_config(self.section).can_edit:
            return
        match self.section:
            case Section.MODELS:
                model = self.models.selected()
                if model is not None:
                    self.modals.open(
                        ModelForm.new_edit(
                            model.alias,
                            model.entry,
                            is_default=model.is_default,
                            providers=self.provider_names(),
                        )
                    )
            case Section.STACKS:
                stack = self.stacks.selected()
                if stack is not None:
                    self.modals.open(StackForm.new_edit(stack.name, stack.entry))
            case _:
                pass

    def commit_form(self) -> None:
        """Validate and write the open form; on errors keep it open."""
        form = self.modals.form
        if form is None:
            return
        errors = form.commit(self.store)
        if errors:
            self.status_message = ", ".join(errors)
            return
        self.modals.close(ModalKind.FORM)
        self.view = View.LIST
        self.refresh_all()
        self.status_message = form.describe_commit()

    def cancel_form(self) -> None:
        form = self.modals.form
        if form is None:
            return
        form.cancel()
        self.modals.close(ModalKind.FORM)
        self.view = View.LIST
        self.status_message = "Cancelled"

    # Deletion

    def confirm_delete(self) -> None:
        """Ask before deleting the selected entry of the current section."""
        match self.section:
            case Section.MODELS:
                model = self.models.selected()
                if model is not None:
                    self._open_confirm(
                        "Delete Model",
                        f"Delete model '{model.alias}'?",
                        PendingAction(PendingActionKind.DELETE_MODEL, model.alias),
                    )
            case Section.STACKS:
                stack = self.stacks.selected()
                if stack is None:
                    return
                if not stack.is_inline:
                    self.status_message = (
                        f"Stack '{stack.name}' is defined in {stack.source}; remove the file"
                    )
                    return
                self._open_confirm(
                    "Delete Stack",
                    f"Delete stack '{stack.name}'?",
                    PendingAction(PendingActionKind.DELETE_STACK, stack.name),
                )
            case Section.TOOLS:
                tool = self.tools.selected()
                if tool is not None and not tool.is_builtin:
                    self._open_confirm(
                        "Remove Tool",
                        f"Remove custom tool '{tool.name}'?",
                        PendingAction(PendingActionKind.DELETE_TOOL, tool.name),
                    )
            case _:
                pass

    def _open_confirm(self, title: str, message: str, action: PendingAction) -> None:
        self.modals.open(ConfirmDialog(title, message, action))

    def resolve_confirm(self, confirmed: bool) -> None:
        """Close the confirmation dialog, running its action if confirmed."""
        dialog = self.modals.confirm
        if dialog is None:
            return
        self.modals.close(ModalKind.CONFIRM)
        if confirmed:
            self.execute_action(dialog.action)

    def execute_action(self, action: PendingAction) -> None:
        match action.kind:
            case PendingActionKind.DELETE_MODEL:
                self.store.remove_model(action.target)
                self.refresh_all()
                self.status_message = f"Deleted model '{action.target}'"
            case PendingActionKind.DELETE_STACK:
                self.store.remove_stack(action.target)
                self.refresh_all()
                self.status_message = f"Deleted stack '{action.target}'"
            case PendingActionKind.DELETE_TOOL:
                self.store.remove_custom_tool(action.target)
                self.refresh_all()
                self.status_message = f"Removed tool '{action.target}'"
            case PendingActionKind.QUIT:
                self.should_quit = True

    # External CLI

    def refresh_cli_info(self) -> None:
        """Start a new background fetch; any fetch in flight is abandoned."""
        self.cli_status = CliStatus.loading()
        fetcher = CliInfoFetcher(self.cli)
        fetcher.start()
        self._fetcher = fetcher

    def poll_cli_info(self) -> None:
        """Pick up the fetch result if it has arrived. Never blocks."""
        if self._fetcher is None:
            return
        status = self._fetcher.poll()
        if status is not None:
            self.cli_status = status
            self._fetcher = None

    def request_login(self) -> None:
        self._effect = LoginRequested()

    def take_effect(self) -> Effect | None:
        """Hand the pending effect to the driver, clearing it."""
        effect = self._effect
        self._effect = None
        return effect

    def login_complete(self, success: bool) -> None:
        """Receive the outcome of a LoginRequested effect."""
        if self.is_wizard_mode:
            self.wizard_oauth_complete(success)
            return
        self.status_message = "Login successful" if success else "Login failed"
        self.refresh_cli_info()

    # Wizard

    def wizard_oauth_complete(self, success: bool) -> None:
        wizard = self.modals.wizard
        if wizard is not None:
            wizard.oauth_complete(success)

    def cancel_wizard(self) -> None:
        self.modals.close(ModalKind.WIZARD)
        self.status_message = "Setup cancelled"
        self.should_quit = True

    def complete_wizard(self) -> None:
        """Write the provider and model chosen in the wizard, save, and quit."""
        wizard = self.modals.wizard
        if wizard is None:
            return
        self.modals.close(ModalKind.WIZARD)

        alias = wizard.model_alias.value.strip()
        self.store.put_provider(wizard.selected_provider.key, wizard.provider_entry())
        self.store.put_model(alias, wizard.model_entry(), replaces=None)
        self.store.set_default_model(alias)
        try:
            self.store.save()
        except OSError as e:
            logger.debug("Saving %s failed: %s", self.store.source_path, e)
            self.status_message = f"Setup failed: {e}"
        else:
            self.status_message = (
                f"Setup complete! Default model: {alias} (saved to {self.store.source_path})"
            )
        self.should_quit = True
