"""TUI runner abstraction for testability.

This module provides an ABC for running the Textual editor, enabling CLI
tests without starting the Textual event loop.
"""

from abc import ABC, abstractmethod

from karl_tui.tui.app import KarlTuiApp


class TuiRunner(ABC):
    """Abstract interface for running the editor app."""

    @abstractmethod
    def run(self, app: KarlTuiApp) -> None:
        """Run the editor app until it exits.

        Args:
            app: The KarlTuiApp instance to run
        """
        ...


class RealTuiRunner(TuiRunner):
    """Production implementation that runs the Textual event loop."""

    def run(self, app: KarlTuiApp) -> None:
        app.run()


class FakeTuiRunner(TuiRunner):
    """Test implementation that captures apps without running the event loop."""

    def __init__(self) -> None:
        self._apps_run: list[KarlTuiApp] = []

    def run(self, app: KarlTuiApp) -> None:
        """Capture app without running event loop."""
        self._apps_run.append(app)

    @property
    def apps_run(self) -> list[KarlTuiApp]:
        """Apps that were passed to run().

        This property is for test assertions only.
        """
        return self._apps_run
