"""Tests for Application key dispatch and editor operations."""

import json
from pathlib import Path

from karl_tui.config.paths import ConfigPaths
from karl_tui.gateway.karl_cli.fake import FakeKarlCli, make_cli_info
from karl_tui.gateway.karl_cli.types import CliState
from karl_tui.tui.application import Application
from karl_tui.tui.effects import LoginRequested
from karl_tui.tui.forms.model_form import ModelForm
from karl_tui.tui.modal.controller import ModalKind
from karl_tui.tui.views.types import Section, View
from karl_tui.tui.wizard.state import InitStep
from tests.test_utils.karl_env import make_application, make_paths, press, type_text, write_json

ANTHROPIC_PROVIDER = {"anthropic": {"type": "anthropic", "apiKey": "sk-test"}}


def _app(tmp_path: Path, config: dict | None = None, **kwargs) -> tuple[Application, ConfigPaths]:
    paths = make_paths(tmp_path)
    if config is not None:
        write_json(paths.global_config_path, config)
    return make_application(paths, **kwargs), paths


class TestNavigation:
    """Section switching and list movement."""

    def test_starts_in_settings(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)

        assert app.section == Section.SETTINGS
        assert app.view == View.LIST
        assert app.modals.active() is None

    def test_tab_and_number_keys(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)

        press(app, "tab")
        assert app.section == Section.MODELS

        press(app, "shift+tab", "shift+tab")
        assert app.section == Section.HOOKS

        press(app, "3")
        assert app.section == Section.STACKS

        press(app, "9")
        assert app.section == Section.STACKS

    def test_switching_section_resets_view(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, {"models": {"fast": {"provider": "p", "model": "m"}}})
        press(app, "2", "enter")
        assert app.view == View.DETAIL

        press(app, "4")

        assert app.view == View.LIST

    def test_detail_back(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "2", "l")

        press(app, "escape")

        assert app.view == View.LIST

    def test_selection_wraps(self, tmp_path: Path) -> None:
        app, _ = _app(
            tmp_path,
            {
                "models": {
                    "a": {"provider": "p", "model": "m"},
                    "b": {"provider": "p", "model": "m"},
                }
            },
        )
        press(app, "2", "k")

        selected = app.models.selected()
        assert selected is not None
        assert selected.alias == "b"

    def test_default_model_flagged(self, tmp_path: Path) -> None:
        app, _ = _app(
            tmp_path,
            {
                "defaultModel": "b",
                "models": {
                    "a": {"provider": "p", "model": "m"},
                    "b": {"provider": "p", "model": "m"},
                },
            },
        )

        assert [(item.alias, item.is_default) for item in app.models.iterate_visible()] == [
            ("a", False),
            ("b", True),
        ]

    def test_status_cleared_by_next_key(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "2", "r")
        assert app.status_message == "Refreshed"

        press(app, "j")

        assert app.status_message is None


class TestSearch:
    """Per-section queries."""

    CONFIG = {
        "models": {
            "fast": {"provider": "p", "model": "m"},
            "smart": {"provider": "p", "model": "m"},
        }
    }

    def test_typing_filters_live(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, self.CONFIG)
        press(app, "2", "/")
        assert app.modals.active() == ModalKind.SEARCH

        type_text(app, "SM")

        assert [item.alias for item in app.models.iterate_visible()] == ["smart"]

    def test_query_survives_refresh(self, tmp_path: Path) -> None:
        """A finished search stays applied after lists are rebuilt."""
        app, _ = _app(tmp_path, self.CONFIG)
        press(app, "2", "/")
        type_text(app, "sm")
        press(app, "enter")
        assert app.modals.active() is None

        press(app, "r")

        assert app.models.visible_count() == 1
        assert app.search_queries == {Section.MODELS: "sm"}

    def test_reopen_shows_query_and_escape_clears(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, self.CONFIG)
        press(app, "2", "/")
        type_text(app, "sm")
        press(app, "enter", "/")

        search = app.modals.search
        assert search is not None
        assert search.query.value == "sm"

        press(app, "escape")

        assert app.models.visible_count() == 2
        assert app.search_queries == {}

    def test_search_owns_keys(self, tmp_path: Path) -> None:
        """While searching, "q" is text rather than quit."""
        app, _ = _app(tmp_path, self.CONFIG)
        press(app, "2", "/", "q")

        assert not app.should_quit
        search = app.modals.search
        assert search is not None
        assert search.query.value == "q"

    def test_settings_not_searchable(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)

        press(app, "/")

        assert app.modals.active() is None


class TestDeleteConfirmation:
    """Deleting entries goes through a dialog that defaults to "No"."""

    def test_stack_delete_flow(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, {"stacks": {"alpha": {"model": "fast"}, "beta": {}}})
        press(app, "3", "d")

        dialog = app.modals.confirm
        assert dialog is not None
        assert not dialog.is_confirmed()
        assert dialog.message == "Delete stack 'alpha'?"

        press(app, "enter")
        assert set(app.store.config.stacks) == {"alpha", "beta"}
        assert not app.dirty

        press(app, "d", "right", "enter")
        assert set(app.store.config.stacks) == {"beta"}
        assert app.dirty
        assert app.status_message == "Deleted stack 'alpha'"

    def test_escape_cancels(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, {"models": {"fast": {"provider": "p", "model": "m"}}})
        press(app, "2", "d", "right", "escape")

        assert "fast" in app.store.config.models
        assert app.modals.active() is None

    def test_model_delete(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, {"models": {"fast": {"provider": "p", "model": "m"}}})
        press(app, "2", "d", "tab", "enter")

        assert app.store.config.models == {}
        assert app.models.total_count() == 0
        assert app.models.selected() is None

    def test_file_stack_is_refused(self, tmp_path: Path) -> None:
        paths = make_paths(tmp_path)
        stack_file = write_json(paths.global_config_dir / "stacks" / "filed.json", {"model": "x"})
        app = make_application(paths)
        press(app, "3", "d")

        assert app.modals.active() is None
        assert app.status_message == f"Stack 'filed' is defined in {stack_file}; remove the file"

    def test_builtin_tool_cannot_be_removed(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "5", "d")

        assert app.modals.active() is None

    def test_custom_tool_removed(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, {"tools": {"custom": ["/bin/lint"]}})
        press(app, "5", "k", "d", "l", "enter")

        assert app.store.config.tools.custom == ()
        assert app.status_message == "Removed tool '/bin/lint'"


class TestTools:
    def test_list_order(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, {"tools": {"enabled": ["bash"], "custom": ["/bin/lint"]}})

        assert [(t.name, t.enabled, t.is_builtin) for t in app.tools.iterate_visible()] == [
            ("bash", True, True),
            ("read", False, True),
            ("write", False, True),
            ("edit", False, True),
            ("/bin/lint", True, False),
        ]

    def test_space_toggles_builtin_and_keeps_selection(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "5", "j", "space")

        assert "read" not in app.store.config.tools.enabled
        assert app.tools.selection == 1
        assert app.dirty

        press(app, "space")
        assert "read" in app.store.config.tools.enabled

    def test_space_ignores_custom_tool(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, {"tools": {"custom": ["/bin/lint"]}})
        press(app, "5", "k", "space")

        assert not app.dirty


class TestForms:
    """Create and edit through the form modal."""

    def test_create_model(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, {"providers": ANTHROPIC_PROVIDER})
        press(app, "2", "n")
        assert isinstance(app.modals.form, ModelForm)

        type_text(app, "quick")
        press(app, "ctrl+s")

        assert app.modals.active() is None
        assert app.status_message == "Created model 'quick'"
        assert [item.alias for item in app.models.iterate_visible()] == ["quick"]

    def test_validation_keeps_form_open(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "2", "n", "ctrl+s")

        assert app.modals.active() == ModalKind.FORM
        assert app.status_message == "Alias is required, No providers configured, Model is required"
        assert not app.dirty

    def test_form_owns_keys(self, tmp_path: Path) -> None:
        """Normal-mode letters are typed into the focused field."""
        app, _ = _app(tmp_path)
        press(app, "3", "n")
        type_text(app, "qd")

        form = app.modals.form
        assert form is not None
        assert form.key() == "qd"
        assert not app.should_quit

    def test_escape_cancels(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "3", "n", "x", "escape")

        assert app.modals.active() is None
        assert app.status_message == "Cancelled"
        assert app.store.config.stacks == {}

    def test_edit_from_detail(self, tmp_path: Path) -> None:
        app, _ = _app(
            tmp_path,
            {"providers": ANTHROPIC_PROVIDER, "models": {"fast": {"provider": "anthropic", "model": "m"}}},
        )
        press(app, "2", "enter", "e")

        form = app.modals.form
        assert isinstance(form, ModelForm)
        assert form.original_key == "fast"
        assert form.set_as_default.value

    def test_settings_has_no_forms(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "n", "e")

        assert app.modals.active() is None


class TestSaveAndQuit:
    def test_save_writes_target(self, tmp_path: Path) -> None:
        app, paths = _app(tmp_path)
        press(app, "5", "space", "ctrl+s")

        assert app.status_message == "Config saved"
        assert not app.dirty
        saved = json.loads(paths.global_config_path.read_text(encoding="utf-8"))
        assert saved["tools"]["enabled"] == ["read", "write", "edit"]

    def test_save_failure_keeps_dirty(self, tmp_path: Path) -> None:
        app, paths = _app(tmp_path)
        press(app, "5", "space")
        paths.global_config_dir.parent.mkdir(parents=True)
        paths.global_config_dir.write_text("not a directory", encoding="utf-8")

        press(app, "ctrl+s")

        assert app.status_message is not None
        assert app.status_message.startswith("Save failed: ")
        assert app.dirty

    def test_clean_quit(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)

        press(app, "q")

        assert app.should_quit

    def test_dirty_quit_asks(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "5", "space", "q")

        dialog = app.modals.confirm
        assert dialog is not None
        assert dialog.title == "Unsaved Changes"

        press(app, "enter")
        assert not app.should_quit

        press(app, "q", "right", "enter")
        assert app.should_quit

    def test_ctrl_c_quits_without_asking(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "5", "space", "ctrl+c")

        assert app.should_quit


class TestCliInfo:
    def test_fetch_result_is_polled(self, tmp_path: Path) -> None:
        cli = FakeKarlCli(info=make_cli_info(version="2.0.0"))
        app, _ = _app(tmp_path, cli=cli)
        assert app.cli_status.state == CliState.LOADING

        fetcher = app.cli_fetcher
        assert fetcher is not None
        fetcher.join(timeout=5)
        app.poll_cli_info()

        assert app.cli_status.state == CliState.LOADED
        assert app.cli_status.info is not None
        assert app.cli_status.info.version == "2.0.0"
        assert app.cli_fetcher is None

    def test_missing_cli(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        fetcher = app.cli_fetcher
        assert fetcher is not None
        fetcher.join(timeout=5)

        app.poll_cli_info()

        assert app.cli_status.state == CliState.NOT_AVAILABLE

    def test_login_effect(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "L")

        assert app.take_effect() == LoginRequested()
        assert app.take_effect() is None

    def test_login_only_from_settings(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)
        press(app, "2", "L")

        assert app.take_effect() is None

    def test_login_complete_refreshes(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path)

        app.login_complete(False)

        assert app.status_message == "Login failed"
        assert app.cli_status.state == CliState.LOADING
        assert app.cli_fetcher is not None


class TestWizard:
    """Init mode runs the setup wizard and nothing else."""

    def test_no_fetch_in_init_mode(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, init_mode=True)

        assert app.is_wizard_mode
        assert app.cli_fetcher is None

    def test_api_key_setup_writes_config(self, tmp_path: Path) -> None:
        app, paths = _app(tmp_path, {"models": {"old": {"provider": "p", "model": "m"}}}, init_mode=True)
        press(app, "enter", "down", "enter")
        type_text(app, "sk-1")
        press(app, "enter", "enter", "enter")

        assert app.should_quit
        assert app.status_message == (
            f"Setup complete! Default model: fast (saved to {paths.global_config_path})"
        )
        saved = json.loads(paths.global_config_path.read_text(encoding="utf-8"))
        assert saved["defaultModel"] == "fast"
        assert saved["providers"]["anthropic"] == {"type": "anthropic", "apiKey": "sk-1"}
        assert saved["models"]["fast"] == {
            "provider": "anthropic",
            "model": "claude-sonnet-4-20250514",
        }
        assert "old" in saved["models"]

    def test_setup_reports_project_file(self, tmp_path: Path) -> None:
        """With a project layer loaded, the message names the project file."""
        paths = make_paths(tmp_path)
        write_json(paths.project_config_path, {"models": {}})
        app = make_application(paths, init_mode=True)
        press(app, "enter", "down", "enter")
        type_text(app, "sk-1")
        press(app, "enter", "enter", "enter")

        assert app.status_message == (
            f"Setup complete! Default model: fast (saved to {paths.project_config_path})"
        )
        saved = json.loads(paths.project_config_path.read_text(encoding="utf-8"))
        assert saved["defaultModel"] == "fast"
        assert not paths.global_config_path.exists()

    def test_oauth_login_moves_wizard_on(self, tmp_path: Path) -> None:
        app, _ = _app(tmp_path, init_mode=True)
        press(app, "enter", "enter", "enter")
        assert app.take_effect() == LoginRequested()

        app.login_complete(True)

        wizard = app.modals.wizard
        assert wizard is not None
        assert wizard.step == InitStep.CREATE_MODEL

    def test_escape_quits_without_saving(self, tmp_path: Path) -> None:
        app, paths = _app(tmp_path, init_mode=True)
        press(app, "enter", "escape")

        assert app.should_quit
        assert app.status_message == "Setup cancelled"
        assert not paths.global_config_path.exists()
