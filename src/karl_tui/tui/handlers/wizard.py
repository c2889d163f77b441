"""Keys handled while the setup wizard runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from karl_tui.tui.keys import KeyEvent
from karl_tui.tui.wizard.state import WizardOutcome

if TYPE_CHECKING:
    from karl_tui.tui.application import Application


def handle_wizard_key(app: Application, key: KeyEvent) -> None:
    wizard = app.modals.wizard
    if wizard is None:
        return
    match wizard.handle_key(key):
        case WizardOutcome.CANCEL:
            app.cancel_wizard()
        case WizardOutcome.REQUEST_LOGIN:
            app.request_login()
        case WizardOutcome.COMPLETE:
            app.complete_wizard()
        case WizardOutcome.NONE:
            pass
