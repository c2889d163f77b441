"""Render Application state for the Textual driver.

Every function here is a pure read of Application state. Section lists are
returned as table rows for a DataTable; everything else is rich Text placed
into Static widgets after each key press.
"""

from __future__ import annotations

from rich.text import Text

from karl_tui.discovery.types import HookInfo, SkillInfo, StackItem
from karl_tui.gateway.karl_cli.types import CliState
from karl_tui.tui.application import Application
from karl_tui.tui.data.types import ModelItem, ToolItem
from karl_tui.tui.dialogs.confirm import ConfirmDialog
from karl_tui.tui.fields.choice import ComboBox, Selector, Toggle
from karl_tui.tui.fields.text import TextArea, TextInput
from karl_tui.tui.forms.base import FormMode, FormSession
from karl_tui.tui.forms.providers import PROVIDER_OPTIONS
from karl_tui.tui.views.types import SECTION_CONFIGS, Section, View, get_section_config
from karl_tui.tui.wizard.state import InitStep, InitWizard, OAuthStatus

SELECTED_STYLE = "bold reverse"
MUTED_STYLE = "dim"
ACCENT_STYLE = "bold cyan"
ERROR_STYLE = "bold red"


def render_section_bar(app: Application) -> Text:
    """Section tabs with the active one highlighted, plus a modified marker."""
    text = Text()
    if app.is_wizard_mode:
        text.append("karl setup", style=ACCENT_STYLE)
        return text
    for i, config in enumerate(SECTION_CONFIGS):
        if i > 0:
            text.append("  ")
        label = f"{config.key_hint}:{config.display_name}"
        if config.section == app.section:
            text.append(label, style="bold white")
        else:
            text.append(label, style=MUTED_STYLE)
    if app.dirty:
        text.append("  [modified]", style="bold yellow")
    return text


def render_body(app: Application) -> Text:
    wizard = app.modals.wizard
    if wizard is not None:
        return render_wizard(wizard)

    form = app.modals.form
    if form is not None:
        return render_form(form)
    return render_section(app)


def render_status(app: Application) -> Text:
    text = Text()
    search = app.modals.search
    if search is not None:
        text.append("/", style=ACCENT_STYLE)
        text.append_text(_render_text_input(search.query, focused=True))
        text.append("   Enter: keep  Esc: clear", style=MUTED_STYLE)
        return text
    if app.status_message:
        text.append(app.status_message)
        return text
    text.append(_key_hints(app), style=MUTED_STYLE)
    return text


def _key_hints(app: Application) -> str:
    if app.is_wizard_mode:
        return "Enter: next  Backspace: back  Esc: quit"
    if app.modals.confirm is not None:
        return "←/→: choose  Enter: confirm  Esc: cancel"
    if app.modals.form is not None:
        return "Tab: next field  Ctrl+S: save  Esc: cancel"
    if app.section == Section.SETTINGS:
        return "L: login  r: refresh  Ctrl+S: save  q: quit"
    config = get_section_config(app.section)
    hints = ["j/k: move", "Enter: details"]
    if config.searchable:
        hints.append("/: search")
    if config.can_create:
        hints.append("n: new")
    if config.can_edit:
        hints.append("e: edit")
    if app.section in (Section.MODELS, Section.STACKS, Section.TOOLS):
        hints.append("d: delete")
    if app.section == Section.TOOLS:
        hints.append("Space: toggle")
    hints.extend(["Ctrl+S: save", "q: quit"])
    return "  ".join(hints)


# Sections


def render_section(app: Application) -> Text:
    """Settings, an item detail, or the header shown above a section table."""
    if app.section == Section.SETTINGS:
        return render_settings(app)
    collection = app.collection(app.section)
    assert collection is not None
    if app.view == View.DETAIL:
        item = collection.selected()
        if item is None:
            return Text("Nothing selected", style=MUTED_STYLE)
        return render_detail(item)

    text = Text()
    query = app.search_queries.get(app.section)
    if query:
        text.append(f"Filter: {query}", style=ACCENT_STYLE)
        text.append(f"  ({collection.visible_count()}/{collection.total_count()})")
    if collection.visible_count() == 0:
        if query:
            text.append("\n\n")
        text.append("No entries", style=MUTED_STYLE)
    return text


def shows_list(app: Application) -> bool:
    """Whether the current section list is on screen (no form, wizard or detail)."""
    return (
        app.modals.wizard is None
        and app.modals.form is None
        and app.section != Section.SETTINGS
        and app.view == View.LIST
    )


LIST_COLUMNS: dict[Section, tuple[str, ...]] = {
    Section.MODELS: ("", "Alias", "Provider", "Model"),
    Section.STACKS: ("Name", "Display name", "Source"),
    Section.SKILLS: ("Name", "Description"),
    Section.TOOLS: ("", "Name", "Kind"),
    Section.HOOKS: ("Name", "Type"),
}


def list_rows(app: Application) -> list[tuple[str, ...]]:
    """Table rows for the visible items of the current section, in display order."""
    collection = app.collection(app.section)
    if collection is None:
        return []
    return [list_row(item) for item in collection.iterate_visible()]


def list_row(item: object) -> tuple[str, ...]:
    if isinstance(item, ModelItem):
        marker = "*" if item.is_default else ""
        return (marker, item.alias, item.entry.provider, item.entry.model)
    if isinstance(item, StackItem):
        source = "inline" if item.is_inline else "file"
        return (item.name, item.entry.name or "", source)
    if isinstance(item, SkillInfo):
        return (item.name, item.description)
    if isinstance(item, ToolItem):
        check = "[x]" if item.enabled else "[ ]"
        kind = "built-in" if item.is_builtin else "custom"
        return (check, item.name, kind)
    if isinstance(item, HookInfo):
        return (item.name, item.hook_type)
    return (str(item),)


def render_detail(item: object) -> Text:
    rows: list[tuple[str, str]] = []
    if isinstance(item, ModelItem):
        rows = [
            ("Alias", item.alias),
            ("Provider", item.entry.provider),
            ("Model", item.entry.model),
            ("Default", "yes" if item.is_default else "no"),
        ]
    elif isinstance(item, StackItem):
        entry = item.entry
        rows = [
            ("Name", item.name),
            ("Source", item.source),
            ("Extends", entry.extends or ""),
            ("Model", entry.model or ""),
            ("Temperature", "" if entry.temperature is None else str(entry.temperature)),
            ("Timeout", "" if entry.timeout is None else str(entry.timeout)),
            ("Max tokens", "" if entry.max_tokens is None else str(entry.max_tokens)),
            ("Skill", entry.skill or ""),
            ("Context file", entry.context_file or ""),
            ("Unrestricted", "yes" if entry.unrestricted else "no"),
            ("Context", entry.context or ""),
        ]
    elif isinstance(item, SkillInfo):
        rows = [
            ("Name", item.name),
            ("Description", item.description),
            ("License", item.license or ""),
            ("Path", str(item.path)),
        ]
    elif isinstance(item, ToolItem):
        rows = [
            ("Name", item.name),
            ("Kind", "built-in" if item.is_builtin else "custom"),
            ("Enabled", "yes" if item.enabled else "no"),
        ]
    elif isinstance(item, HookInfo):
        rows = [("Name", item.name), ("Type", item.hook_type), ("Path", str(item.path))]

    text = Text()
    for i, (label, value) in enumerate(rows):
        if i > 0:
            text.append("\n")
        text.append(f"{label:<14}", style=ACCENT_STYLE)
        text.append(value)
    return text


def render_settings(app: Application) -> Text:
    config = app.store.config
    text = Text()
    text.append("Configuration\n", style=ACCENT_STYLE)
    text.append(f"  Save target    {app.store.source_path}\n")
    text.append(f"  Default model  {config.default_model}\n")
    text.append(f"  Enabled tools  {', '.join(config.tools.enabled) or '(none)'}\n")
    volley = config.volley
    text.append(
        f"  Volley         max {volley.max_concurrent}, "
        f"{volley.retry_attempts} retries, {volley.retry_backoff} backoff\n"
    )

    text.append("\nProviders\n", style=ACCENT_STYLE)
    if not app.providers:
        text.append("  (none configured)\n", style=MUTED_STYLE)
    for provider in app.providers:
        auth = provider.entry.auth_type or ("api key" if provider.entry.api_key else "none")
        text.append(f"  {provider.name:<16} {provider.entry.provider_type:<12} auth: {auth}\n")

    text.append("\nkarl CLI\n", style=ACCENT_STYLE)
    status = app.cli_status
    if status.state == CliState.LOADING:
        text.append("  Loading...", style=MUTED_STYLE)
    elif status.state == CliState.NOT_AVAILABLE:
        text.append("  karl is not installed or not on PATH", style=MUTED_STYLE)
    elif status.state == CliState.ERROR:
        text.append(f"  Error: {status.error}", style=ERROR_STYLE)
    elif status.info is not None:
        info = status.info
        text.append(f"  Version        {info.version}\n")
        for name, auth_status in sorted(info.auth.items()):
            state = "authenticated" if auth_status.authenticated else "not authenticated"
            line = f"  Auth {name:<10} {state} ({auth_status.method})"
            if auth_status.expires_at:
                line += f", expires {auth_status.expires_at}"
            text.append(line + "\n")
        counts = info.counts
        text.append(
            f"  Discovered     {counts.models} models, {counts.stacks} stacks, "
            f"{counts.skills} skills, {counts.hooks} hooks"
        )
    return text


# Modals


def render_form(form: FormSession) -> Text:
    action = "New" if form.mode == FormMode.CREATE else "Edit"
    text = Text(f"{action} {form.entity_name}\n\n", style=ACCENT_STYLE)
    for index, field in enumerate(form.fields):
        focused = index == form.focused_field
        marker = "> " if focused else "  "
        label = f"{field.label}{' *' if field.required else ''}"
        text.append(marker + f"{label:<22}", style="bold" if focused else "")
        text.append_text(_render_field(field.state, focused=focused))
        text.append("\n")
    return text


def _render_field(state: object, *, focused: bool) -> Text:
    if isinstance(state, TextInput):
        return _render_text_input(state, focused=focused)
    if isinstance(state, TextArea):
        if not state.text and not focused:
            return Text(state.placeholder, style=MUTED_STYLE)
        text = Text()
        for row, line in enumerate(state.lines):
            if row > 0:
                text.append("\n" + " " * 24)
            text.append_text(_render_text_input(line, focused=focused and row == state.row))
        return text
    if isinstance(state, Selector):
        value = state.selected_value()
        if value is None:
            return Text("(no options)", style=MUTED_STYLE)
        return Text(f"< {value} >" if focused else value)
    if isinstance(state, ComboBox):
        text = _render_text_input(state.text, focused=focused)
        if focused and state.options:
            text.append("  ←/→ suggestions", style=MUTED_STYLE)
        return text
    if isinstance(state, Toggle):
        return Text(state.display())
    return Text(str(state))


def _render_text_input(field: TextInput, *, focused: bool) -> Text:
    if not field.value and not focused:
        return Text(field.placeholder, style=MUTED_STYLE)
    if not focused:
        return Text(field.value)
    text = Text(field.value[: field.cursor])
    cursor_char = field.value[field.cursor : field.cursor + 1] or " "
    text.append(cursor_char, style="reverse")
    text.append(field.value[field.cursor + 1 :])
    return text


def render_confirm(dialog: ConfirmDialog) -> Text:
    text = Text()
    text.append(f"{dialog.title}\n", style="bold yellow")
    text.append(f"{dialog.message}\n\n")
    cancel_style = SELECTED_STYLE if not dialog.confirm_selected else ""
    confirm_style = SELECTED_STYLE if dialog.confirm_selected else ""
    text.append(f" {dialog.cancel_label} ", style=cancel_style)
    text.append("   ")
    text.append(f" {dialog.confirm_label} ", style=confirm_style)
    return text


def render_wizard(wizard: InitWizard) -> Text:
    text = Text()
    step = wizard.step
    if step == InitStep.WELCOME:
        text.append("Welcome to karl\n\n", style=ACCENT_STYLE)
        text.append("This wizard configures a provider and a default model.\n")
        text.append("Press Enter to begin.")
    elif step == InitStep.SELECT_PROVIDER:
        text.append("Choose a provider\n\n", style=ACCENT_STYLE)
        for index, option in enumerate(PROVIDER_OPTIONS):
            style = SELECTED_STYLE if index == wizard.provider_index else ""
            text.append(f"  {option.name}", style=style)
            text.append(f"  ({option.auth_type})\n", style=MUTED_STYLE)
    elif step == InitStep.AUTHENTICATE_OAUTH:
        text.append(f"Sign in to {wizard.selected_provider.name}\n\n", style=ACCENT_STYLE)
        if wizard.oauth_status == OAuthStatus.IN_PROGRESS:
            text.append("Waiting for login to finish...")
        elif wizard.oauth_status == OAuthStatus.SUCCESS:
            text.append("Signed in.")
        else:
            text.append("Press Enter to run `karl --login`, or s to skip.")
    elif step == InitStep.AUTHENTICATE_API_KEY:
        text.append(f"API key for {wizard.selected_provider.name}\n\n", style=ACCENT_STYLE)
        text.append("Key: ")
        text.append_text(_render_text_input(wizard.api_key, focused=True))
    elif step == InitStep.CREATE_MODEL:
        text.append("Create your default model\n\n", style=ACCENT_STYLE)
        text.append("Alias: ")
        text.append_text(
            _render_text_input(wizard.model_alias, focused=wizard.model_focused_field == 0)
        )
        text.append("\nModel: ")
        model = wizard.selected_model()
        text.append(model, style=SELECTED_STYLE if wizard.model_focused_field == 1 else "")
    elif step == InitStep.CONFIRM:
        text.append("Ready to save\n\n", style=ACCENT_STYLE)
        text.append(f"  Provider  {wizard.selected_provider.key}\n")
        text.append(f"  Alias     {wizard.model_alias.value.strip()}\n")
        text.append(f"  Model     {wizard.selected_model()}\n\n")
        text.append("Save this configuration? (y/n)")

    if wizard.error_message:
        text.append(f"\n\n{wizard.error_message}", style=ERROR_STYLE)
    return text

