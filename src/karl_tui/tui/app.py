"""Textual driver for the karl configuration editor.

The driver owns the terminal and nothing else: it turns Textual key events
into KeyEvents for the Application, renders the Application after each
event, polls the background CLI fetch, and performs the effects the
Application asks for.
"""

import logging

from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.containers import VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import Static

from karl_tui.gateway.karl_cli.abc import KarlCli
from karl_tui.tui.application import Application
from karl_tui.tui.effects import LoginRequested
from karl_tui.tui.keys import KeyEvent
from karl_tui.tui.render import (
    LIST_COLUMNS,
    list_rows,
    render_body,
    render_confirm,
    render_section_bar,
    render_status,
    shows_list,
)
from karl_tui.tui.widgets.section_table import SectionTable

logger = logging.getLogger(__name__)


class ConfirmScreen(ModalScreen):
    """Overlay for the Application's pending confirmation dialog.

    Keys are handed back to the editor screen so the Application keeps
    deciding what each key does.
    """

    inherit_bindings = False

    AUTO_FOCUS = None

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 60;
        height: auto;
        border: thick $warning;
        background: $surface;
        padding: 1 2;
    }
    """

    def __init__(self, editor: "EditorScreen") -> None:
        super().__init__()
        self._editor = editor

    def compose(self) -> ComposeResult:
        yield Static(id="confirm-dialog")

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        dialog = self._editor.application.modals.confirm
        if dialog is not None:
            self.query_one("#confirm-dialog", Static).update(render_confirm(dialog))

    def on_key(self, event: events.Key) -> None:
        self._editor.dispatch_key(event)


class EditorScreen(Screen):
    """Main screen showing the section bar, the body and the status line.

    Textual's own bindings are disabled; every key goes to the Application.
    """

    inherit_bindings = False

    AUTO_FOCUS = None

    DEFAULT_CSS = """
    EditorScreen {
        layout: vertical;
    }

    #section-bar {
        dock: top;
        height: 1;
        background: $surface;
        padding: 0 1;
    }

    #body-scroll {
        height: 1fr;
        padding: 1 2;
    }

    #list-table {
        height: auto;
    }

    #status-line {
        dock: bottom;
        height: 1;
        background: $surface;
        padding: 0 1;
    }
    """

    def __init__(self, application: Application, cli: KarlCli, *, poll_interval: float) -> None:
        super().__init__()
        self.application = application
        self._cli = cli
        self._poll_interval = poll_interval

    def compose(self) -> ComposeResult:
        yield Static(id="section-bar")
        with VerticalScroll(id="body-scroll"):
            yield Static(id="body")
            yield SectionTable(id="list-table")
        yield Static(id="status-line")

    def on_mount(self) -> None:
        self.refresh_view()
        self.set_interval(self._poll_interval, self._poll_cli_info)

    def refresh_view(self) -> None:
        app = self.application
        self.query_one("#section-bar", Static).update(render_section_bar(app))
        self.query_one("#status-line", Static).update(render_status(app))

        body = self.query_one("#body", Static)
        table = self.query_one("#list-table", SectionTable)
        rows = list_rows(app) if shows_list(app) else []
        content = render_body(app)
        body.update(content)
        body.display = not rows or bool(content.plain)
        table.display = bool(rows)
        if rows:
            collection = app.collection(app.section)
            assert collection is not None
            table.populate(LIST_COLUMNS[app.section], rows, collection.selection)

    def _poll_cli_info(self) -> None:
        before = self.application.cli_status
        self.application.poll_cli_info()
        if self.application.cli_status is not before:
            self.refresh_view()

    def on_key(self, event: events.Key) -> None:
        self.dispatch_key(event)

    def dispatch_key(self, event: events.Key) -> None:
        """Hand a key to the Application, then run effects and redraw."""
        event.stop()
        event.prevent_default()
        self.application.handle_key(KeyEvent.from_textual(event))
        self._run_effects()
        if self.application.should_quit:
            self.app.exit()
            return
        self._sync_confirm_screen()
        self.refresh_view()

    def _sync_confirm_screen(self) -> None:
        """Show or dismiss the confirm overlay to match the Application."""
        confirm_open = self.application.modals.confirm is not None
        top = self.app.screen
        if isinstance(top, ConfirmScreen):
            if confirm_open:
                top.refresh_view()
            else:
                self.app.pop_screen()
        elif confirm_open:
            self.app.push_screen(ConfirmScreen(self))

    def _run_effects(self) -> None:
        effect = self.application.take_effect()
        while effect is not None:
            if isinstance(effect, LoginRequested):
                self.application.login_complete(self._run_login())
            effect = self.application.take_effect()

    def _run_login(self) -> bool:
        """Hand the terminal to `karl --login` and wait for it to exit."""
        try:
            with self.app.suspend():
                return self._cli.run_login()
        except SuspendNotSupported:
            logger.debug("Terminal cannot be suspended; running login in place")
            return self._cli.run_login()


class KarlTuiApp(App):
    """Interactive editor for the karl configuration.

    Wraps an Application; the Application holds all editor state so that it
    can be driven directly in tests without a terminal.
    """

    inherit_bindings = False

    TITLE = "karl"

    def __init__(
        self,
        application: Application,
        cli: KarlCli,
        *,
        poll_interval: float = 0.2,
    ) -> None:
        """Initialize the editor app.

        Args:
            application: Editor state to drive
            cli: Gateway used to run the interactive login flow
            poll_interval: Seconds between checks for the background CLI fetch
        """
        super().__init__()
        self.application = application
        self._cli = cli
        self._poll_interval = poll_interval

    def get_default_screen(self) -> Screen:
        return EditorScreen(self.application, self._cli, poll_interval=self._poll_interval)
