"""Keys handled while a create/edit form is open.

Apart from commit, cancel and focus movement, every key goes to the
focused field, so text fields can receive characters that mean something
else in normal mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from karl_tui.tui.keys import KeyEvent

if TYPE_CHECKING:
    from karl_tui.tui.application import Application


def handle_form_key(app: Application, key: KeyEvent) -> None:
    form = app.modals.form
    if form is None:
        return
    if key.key == "ctrl+s":
        app.commit_form()
    elif key.key == "escape":
        app.cancel_form()
    elif key.key == "tab":
        form.next_field()
    elif key.key == "shift+tab":
        form.prev_field()
    else:
        form.handle_key(key)
