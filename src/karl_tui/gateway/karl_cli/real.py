"""Production karl CLI implementation using subprocess."""

import logging
import shutil
import subprocess

from karl_tui.config.paths import APP_NAME
from karl_tui.gateway.karl_cli.abc import KarlCli
from karl_tui.gateway.karl_cli.types import CliInfo, KarlCliError

logger = logging.getLogger(__name__)


class RealKarlCli(KarlCli):
    """Runs the `karl` executable found on PATH."""

    def __init__(self, executable: str = APP_NAME) -> None:
        self._executable = executable

    def is_available(self) -> bool:
        if shutil.which(self._executable) is None:
            return False
        try:
            result = subprocess.run(
                [self._executable, "--version"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug("Cannot run %s: %s", self._executable, e)
            return False
        return result.returncode == 0

    def fetch_info(self) -> CliInfo:
        try:
            result = subprocess.run(
                [self._executable, "info", "--json"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise KarlCliError(f"Failed to run {self._executable} info: {e}") from e

        if result.returncode != 0:
            raise KarlCliError(f"{self._executable} info failed: {result.stderr.strip()}")

        return CliInfo.from_json(result.stdout)

    def run_login(self) -> bool:
        try:
            result = subprocess.run([self._executable, "--login"], check=False)
        except OSError as e:
            logger.debug("Login flow could not start: %s", e)
            return False
        return result.returncode == 0
