"""karl-tui entry point.

This package provides a terminal editor for the layered karl configuration
(models, providers, stacks, tools) plus read-only views of discovered
skills and hooks. See `karl-tui --help` for details.
"""

from karl_tui.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `karl-tui` console script."""
    cli()
