"""Tests for rendering Application state as text."""

from pathlib import Path

from karl_tui.tui.render import (
    list_rows,
    render_body,
    render_confirm,
    render_section_bar,
    render_status,
    shows_list,
)
from tests.test_utils.karl_env import make_application, make_paths, press, type_text, write_json


def _app(tmp_path: Path, config: dict | None = None, **kwargs):
    paths = make_paths(tmp_path)
    if config is not None:
        write_json(paths.global_config_path, config)
    return make_application(paths, **kwargs)


def test_section_bar_lists_sections(tmp_path: Path) -> None:
    app = _app(tmp_path)

    plain = render_section_bar(app).plain

    assert plain == "1:Settings  2:Models  3:Stacks  4:Skills  5:Tools  6:Hooks"


def test_section_bar_marks_modified(tmp_path: Path) -> None:
    app = _app(tmp_path)
    press(app, "5", "space")

    assert render_section_bar(app).plain.endswith("[modified]")


def test_model_list(tmp_path: Path) -> None:
    """Models become table rows with the default marked."""
    app = _app(
        tmp_path,
        {
            "models": {
                "fast": {"provider": "anthropic", "model": "claude-x"},
                "smart": {"provider": "openai", "model": "gpt"},
            }
        },
    )
    press(app, "2")

    assert shows_list(app)
    assert list_rows(app) == [
        ("*", "fast", "anthropic", "claude-x"),
        ("", "smart", "openai", "gpt"),
    ]
    assert render_body(app).plain == ""


def test_stack_rows_show_display_name(tmp_path: Path) -> None:
    app = _app(tmp_path, {"stacks": {"arch": {"name": "Architect Mode"}, "plain": {}}})
    press(app, "3")

    assert list_rows(app) == [("arch", "Architect Mode", "inline"), ("plain", "", "inline")]


def test_empty_list(tmp_path: Path) -> None:
    app = _app(tmp_path)
    press(app, "3")

    assert render_body(app).plain == "No entries"
    assert list_rows(app) == []


def test_filter_header(tmp_path: Path) -> None:
    app = _app(
        tmp_path,
        {
            "models": {
                "fast": {"provider": "p", "model": "m"},
                "smart": {"provider": "p", "model": "m"},
            }
        },
    )
    press(app, "2", "/")
    type_text(app, "fa")

    assert render_body(app).plain == "Filter: fa  (1/2)"
    assert [row[1] for row in list_rows(app)] == ["fast"]
    assert render_status(app).plain.startswith("/fa")


def test_stack_detail(tmp_path: Path) -> None:
    app = _app(tmp_path, {"stacks": {"arch": {"model": "smart", "temperature": 0.5}}})
    press(app, "3", "enter")

    plain = render_body(app).plain

    assert "arch" in plain
    assert "inline" in plain
    assert "0.5" in plain


def test_settings_shows_providers_and_cli(tmp_path: Path) -> None:
    app = _app(tmp_path, {"providers": {"anthropic": {"type": "anthropic", "apiKey": "k"}}})

    plain = render_body(app).plain

    assert "anthropic" in plain
    assert "auth: api key" in plain
    assert "karl CLI" in plain


def test_confirm_dialog(tmp_path: Path) -> None:
    app = _app(tmp_path, {"stacks": {"arch": {}}})
    press(app, "3", "d")

    dialog = app.modals.confirm
    assert dialog is not None
    plain = render_confirm(dialog).plain

    assert "Delete Stack" in plain
    assert "Delete stack 'arch'?" in plain


def test_form_marks_required_and_focus(tmp_path: Path) -> None:
    app = _app(tmp_path)
    press(app, "3", "n")

    plain = render_body(app).plain

    assert plain.startswith("New stack")
    assert not shows_list(app)
    assert "> Name *" in plain
    assert "  Extends" in plain


def test_status_message_replaces_hints(tmp_path: Path) -> None:
    app = _app(tmp_path)
    assert "q: quit" in render_status(app).plain

    press(app, "3", "n", "escape")

    assert render_status(app).plain == "Cancelled"


def test_wizard_screen(tmp_path: Path) -> None:
    app = _app(tmp_path, init_mode=True)
    press(app, "enter")

    assert render_section_bar(app).plain == "karl setup"
    plain = render_body(app).plain
    assert "Claude Pro/Max" in plain
    assert "OpenRouter" in plain
