"""Tests for KarlTuiContext."""

from pathlib import Path

from karl_tui.config.paths import ConfigPaths
from karl_tui.gateway.karl_cli.fake import FakeKarlCli
from karl_tui.gateway.karl_cli.real import RealKarlCli
from karl_tui.tui.context import KarlTuiContext
from karl_tui.tui.runner import FakeTuiRunner, RealTuiRunner
from tests.test_utils.karl_env import make_paths


def test_for_production_creates_real_implementations() -> None:
    """for_production() creates context with real implementations."""
    ctx = KarlTuiContext.for_production()

    assert ctx.paths == ConfigPaths.default()
    assert isinstance(ctx.cli, RealKarlCli)
    assert isinstance(ctx.tui_runner, RealTuiRunner)


def test_for_test_creates_fakes_by_default(tmp_path: Path) -> None:
    """for_test() creates fake implementations when none are provided."""
    paths = make_paths(tmp_path)

    ctx = KarlTuiContext.for_test(paths)

    assert ctx.paths is paths
    assert isinstance(ctx.cli, FakeKarlCli)
    assert not ctx.cli.is_available()
    assert isinstance(ctx.tui_runner, FakeTuiRunner)


def test_for_test_uses_provided_implementations(tmp_path: Path) -> None:
    """for_test() uses the provided implementations."""
    cli = FakeKarlCli()
    runner = FakeTuiRunner()

    ctx = KarlTuiContext.for_test(make_paths(tmp_path), cli=cli, tui_runner=runner)

    assert ctx.cli is cli
    assert ctx.tui_runner is runner
