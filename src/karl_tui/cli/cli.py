import logging
from pathlib import Path

import click

from karl_tui.config.store import ConfigStore
from karl_tui.tui.app import KarlTuiApp
from karl_tui.tui.application import Application
from karl_tui.tui.context import KarlTuiContext

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


@click.command("karl-tui", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="karl-tui")
@click.option("--init", "init_mode", is_flag=True, help="Run the first-time setup wizard")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write log output to this file instead of stderr",
)
@click.pass_context
def cli(ctx: click.Context, init_mode: bool, debug: bool, log_file: Path | None) -> None:
    """Browse and edit karl models, providers, stacks and tools."""
    if debug:
        if log_file is not None:
            logging.basicConfig(filename=log_file, level=logging.DEBUG, format=LOG_FORMAT)
        else:
            logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = KarlTuiContext.for_production()
    karl_ctx: KarlTuiContext = ctx.obj

    store = ConfigStore.load(karl_ctx.paths)
    application = Application(
        store=store,
        paths=karl_ctx.paths,
        cli=karl_ctx.cli,
        init_mode=init_mode,
    )
    karl_ctx.tui_runner.run(KarlTuiApp(application, karl_ctx.cli))

    if init_mode and application.status_message:
        click.echo(application.status_message)
