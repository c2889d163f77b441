"""Background fetch of `karl info --json`."""

from __future__ import annotations

import logging
import queue
import threading

from karl_tui.gateway.karl_cli.abc import KarlCli
from karl_tui.gateway.karl_cli.types import CliStatus, KarlCliError

logger = logging.getLogger(__name__)


def fetch_cli_status(cli: KarlCli) -> CliStatus:
    """Query the CLI synchronously and fold every failure into a CliStatus."""
    if not cli.is_available():
        return CliStatus.not_available()
    try:
        return CliStatus.loaded(cli.fetch_info())
    except KarlCliError as e:
        logger.debug("karl info failed: %s", e)
        return CliStatus.failed(str(e))


class CliInfoFetcher:
    """Runs one fetch on a worker thread and hands back the result once.

    The worker puts exactly one CliStatus into a single-slot queue. poll()
    never blocks; it returns the status the first time it is available and
    None before and after that.
    """

    def __init__(self, cli: KarlCli) -> None:
        self._cli = cli
        self._results: queue.Queue[CliStatus] = queue.Queue(maxsize=1)
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, name="karl-info", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        self._results.put(fetch_cli_status(self._cli))

    def poll(self) -> CliStatus | None:
        try:
            return self._results.get_nowait()
        except queue.Empty:
            return None

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker to finish. Used by tests."""
        if self._thread is not None:
            self._thread.join(timeout)
