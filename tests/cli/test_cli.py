"""Tests for the karl-tui command."""

import json
import logging
from pathlib import Path

from click.testing import CliRunner

from karl_tui.cli.cli import cli
from karl_tui.tui.context import KarlTuiContext
from karl_tui.tui.runner import FakeTuiRunner
from karl_tui.tui.views.types import Section
from tests.test_utils.karl_env import make_paths, press, type_text, write_json


def test_runs_editor_on_merged_config(tmp_path: Path) -> None:
    """The command loads both layers and hands the editor to the runner."""
    paths = make_paths(tmp_path)
    write_json(paths.global_config_path, {"models": {"fast": {"provider": "p", "model": "m"}}})
    write_json(paths.project_config_path, {"defaultModel": "local"})
    tui_runner = FakeTuiRunner()
    ctx = KarlTuiContext.for_test(paths, tui_runner=tui_runner)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert len(tui_runner.apps_run) == 1
    application = tui_runner.apps_run[0].application
    assert application.section == Section.SETTINGS
    assert application.store.config.default_model == "local"
    assert application.store.source_path == paths.project_config_path
    assert not application.is_wizard_mode


def test_init_starts_wizard(tmp_path: Path) -> None:
    tui_runner = FakeTuiRunner()
    ctx = KarlTuiContext.for_test(make_paths(tmp_path), tui_runner=tui_runner)

    result = CliRunner().invoke(cli, ["--init"], obj=ctx)

    assert result.exit_code == 0, result.output
    application = tui_runner.apps_run[0].application
    assert application.is_wizard_mode
    assert application.cli_fetcher is None


class WizardDrivingRunner(FakeTuiRunner):
    """Runner that completes the wizard instead of starting the event loop."""

    def run(self, app) -> None:
        super().run(app)
        press(app.application, "enter", "down", "enter")
        type_text(app.application, "sk-cli")
        press(app.application, "enter", "enter", "enter")


def test_init_reports_outcome(tmp_path: Path) -> None:
    """After the wizard, the final status is echoed."""
    paths = make_paths(tmp_path)
    ctx = KarlTuiContext.for_test(paths, tui_runner=WizardDrivingRunner())

    result = CliRunner().invoke(cli, ["--init"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Setup complete! Default model: fast" in result.output
    assert str(paths.global_config_path) in result.output
    saved = json.loads(paths.global_config_path.read_text(encoding="utf-8"))
    assert saved["providers"]["anthropic"]["apiKey"] == "sk-cli"


def test_invalid_config_layer_is_skipped(tmp_path: Path) -> None:
    paths = make_paths(tmp_path)
    paths.global_config_path.parent.mkdir(parents=True)
    paths.global_config_path.write_text("{not json", encoding="utf-8")
    tui_runner = FakeTuiRunner()
    ctx = KarlTuiContext.for_test(paths, tui_runner=tui_runner)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert tui_runner.apps_run[0].application.store.config.models == {}


def test_help() -> None:
    result = CliRunner().invoke(cli, ["-h"])

    assert result.exit_code == 0
    assert "--init" in result.output
    assert "--log-file" in result.output


def test_debug_log_file(tmp_path: Path, monkeypatch) -> None:
    """--debug with --log-file configures logging to that file."""
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    log_file = tmp_path / "karl-tui.log"
    ctx = KarlTuiContext.for_test(make_paths(tmp_path))

    result = CliRunner().invoke(cli, ["--debug", "--log-file", str(log_file)], obj=ctx)

    assert result.exit_code == 0, result.output
    assert calls == [
        {"filename": log_file, "level": logging.DEBUG, "format": "%(name)s - %(levelname)s - %(message)s"}
    ]
