"""Keys handled while the search box is open."""

from __future__ import annotations

from typing import TYPE_CHECKING

from karl_tui.tui.keys import KeyEvent

if TYPE_CHECKING:
    from karl_tui.tui.application import Application


def handle_search_key(app: Application, key: KeyEvent) -> None:
    search = app.modals.search
    if search is None:
        return
    if key.key == "escape":
        app.cancel_search()
    elif key.key == "enter":
        app.finish_search()
    elif search.query.handle_key(key):
        app.update_search()
