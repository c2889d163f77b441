"""External karl CLI abstraction.

The editor asks the karl CLI for status information and delegates the
interactive login flow to it. Both calls are idempotent and may be retried.
"""

from abc import ABC, abstractmethod

from karl_tui.gateway.karl_cli.types import CliInfo


class KarlCli(ABC):
    """Abstract karl CLI operations for dependency injection."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the karl executable can be run.

        Returns:
            True if `karl --version` succeeds
        """
        ...

    @abstractmethod
    def fetch_info(self) -> CliInfo:
        """Run `karl info --json` and parse its output.

        Raises:
            KarlCliError: On non-zero exit or unparsable output
        """
        ...

    @abstractmethod
    def run_login(self) -> bool:
        """Run `karl --login` attached to the current terminal.

        Blocks until the process exits.

        Returns:
            True if the login process exited successfully
        """
        ...
