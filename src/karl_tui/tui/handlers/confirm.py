"""Keys handled while a confirmation dialog is open."""

from __future__ import annotations

from typing import TYPE_CHECKING

from karl_tui.tui.keys import KeyEvent

if TYPE_CHECKING:
    from karl_tui.tui.application import Application


def handle_confirm_key(app: Application, key: KeyEvent) -> None:
    dialog = app.modals.confirm
    if dialog is None:
        return
    if key.key == "left" or key.char == "h":
        dialog.select_cancel()
    elif key.key == "right" or key.char == "l":
        dialog.select_confirm()
    elif key.key == "tab":
        dialog.toggle()
    elif key.key == "enter":
        app.resolve_confirm(dialog.is_confirmed())
    elif key.key == "escape":
        app.resolve_confirm(False)
