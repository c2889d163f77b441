"""Dependencies of the karl-tui command.

KarlTuiContext bundles everything the command needs from the outside world
so tests can swap in fakes.
"""

from __future__ import annotations

from dataclasses import dataclass

from karl_tui.config.paths import ConfigPaths
from karl_tui.gateway.karl_cli.abc import KarlCli
from karl_tui.gateway.karl_cli.fake import FakeKarlCli
from karl_tui.gateway.karl_cli.real import RealKarlCli
from karl_tui.tui.runner import FakeTuiRunner, RealTuiRunner, TuiRunner


@dataclass(frozen=True)
class KarlTuiContext:
    """Context for the karl-tui command.

    Attributes:
        paths: Config file and discovery root locations
        cli: Gateway to the external karl CLI
        tui_runner: Runs (or, in tests, records) the Textual app
    """

    paths: ConfigPaths
    cli: KarlCli
    tui_runner: TuiRunner

    @classmethod
    def for_production(cls) -> KarlTuiContext:
        return cls(
            paths=ConfigPaths.default(),
            cli=RealKarlCli(),
            tui_runner=RealTuiRunner(),
        )

    @classmethod
    def for_test(
        cls,
        paths: ConfigPaths,
        *,
        cli: KarlCli | None = None,
        tui_runner: TuiRunner | None = None,
    ) -> KarlTuiContext:
        """Create test context with injectable fakes.

        Args:
            paths: Locations rooted in a temporary directory
            cli: Optional KarlCli. If None, creates FakeKarlCli reporting
                the CLI as unavailable.
            tui_runner: Optional TuiRunner. If None, creates FakeTuiRunner.

        Example:
            tui_runner = FakeTuiRunner()
            ctx = KarlTuiContext.for_test(paths, tui_runner=tui_runner)
            runner.invoke(cli, ["--init"], obj=ctx)
            assert tui_runner.apps_run[0].application.is_wizard_mode
        """
        return cls(
            paths=paths,
            cli=cli or FakeKarlCli(available=False),
            tui_runner=tui_runner or FakeTuiRunner(),
        )
