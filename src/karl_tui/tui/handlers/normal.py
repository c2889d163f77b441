"""Keys handled when no modal context is open."""

from __future__ import annotations

from typing import TYPE_CHECKING

from karl_tui.tui.keys import KeyEvent
from karl_tui.tui.views.types import Section, View, next_section, previous_section, section_for_key

if TYPE_CHECKING:
    from karl_tui.tui.application import Application


def handle_normal_key(app: Application, key: KeyEvent) -> None:
    if _handle_global_key(app, key):
        return
    if app.view == View.DETAIL:
        _handle_detail_key(app, key)
    else:
        _handle_list_key(app, key)


def _handle_global_key(app: Application, key: KeyEvent) -> bool:
    """Quit, save and section switching. Returns True if the key was consumed."""
    char = key.char
    if char == "q":
        app.request_quit()
    elif key.key == "ctrl+c":
        app.should_quit = True
    elif key.key == "ctrl+s":
        app.save()
    elif key.key == "tab":
        app.switch_section(next_section(app.section))
    elif key.key == "shift+tab":
        app.switch_section(previous_section(app.section))
    elif char is not None and char.isdigit():
        section = section_for_key(char)
        if section is not None:
            app.switch_section(section)
    else:
        return False
    return True


def _handle_list_key(app: Application, key: KeyEvent) -> None:
    char = key.char
    if key.key == "down" or char == "j":
        app.move_selection(1)
    elif key.key == "up" or char == "k":
        app.move_selection(-1)
    elif key.key in ("enter", "right") or char == "l":
        app.open_detail()
    elif char == "/":
        app.start_search()
    elif char == "r":
        app.refresh_all()
        app.refresh_cli_info()
        app.status_message = "Refreshed"
    elif char == "L" and app.section == Section.SETTINGS:
        app.request_login()
    elif key.key == "space" and app.section == Section.TOOLS:
        app.toggle_selected_tool()
    elif char == "n":
        app.start_create()
    elif char == "e":
        app.start_edit()
    elif char == "d":
        app.confirm_delete()


def _handle_detail_key(app: Application, key: KeyEvent) -> None:
    if key.key in ("escape", "left") or key.char == "h":
        app.close_detail()
    elif key.char == "e":
        app.start_edit()
