"""Fake karl CLI implementation for testing.

FakeKarlCli returns canned results and records which operations ran,
enabling tests that never spawn processes.
"""

from karl_tui.gateway.karl_cli.abc import KarlCli
from karl_tui.gateway.karl_cli.types import (
    AuthStatus,
    CliInfo,
    ConfigLocations,
    EntityCounts,
    KarlCliError,
    ModelsSummary,
    ProviderStatus,
)


class FakeKarlCli(KarlCli):
    """In-memory fake returning configured results.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        available: bool = True,
        info: CliInfo | None = None,
        info_error: str | None = None,
        login_succeeds: bool = True,
    ) -> None:
        """Create FakeKarlCli with canned results.

        Args:
            available: Value returned by is_available()
            info: Value returned by fetch_info()
            info_error: If set, fetch_info() raises KarlCliError with this message
            login_succeeds: Value returned by run_login()
        """
        self._available = available
        self._info = info
        self._info_error = info_error
        self._login_succeeds = login_succeeds
        self._fetch_count = 0
        self._login_count = 0

    def is_available(self) -> bool:
        return self._available

    def fetch_info(self) -> CliInfo:
        self._fetch_count += 1
        if self._info_error is not None:
            raise KarlCliError(self._info_error)
        if self._info is None:
            raise KarlCliError("No canned info configured")
        return self._info

    def run_login(self) -> bool:
        self._login_count += 1
        return self._login_succeeds

    @property
    def fetch_count(self) -> int:
        """Number of times fetch_info was called.

        This property is for test assertions only.
        """
        return self._fetch_count

    @property
    def login_count(self) -> int:
        """Number of times run_login was called.

        This property is for test assertions only.
        """
        return self._login_count


def make_cli_info(
    *,
    version: str = "1.0.0",
    default_model: str = "fast",
    configured: tuple[str, ...] = ("fast",),
    authenticated: bool = True,
    skills: int = 0,
    stacks: int = 0,
    hooks: int = 0,
) -> CliInfo:
    """Create a CliInfo for tests with one anthropic provider."""
    return CliInfo(
        version=version,
        config=ConfigLocations(
            global_path="~/.config/karl/karl.json",
            project_path=".karl.json",
            global_exists=True,
            project_exists=False,
        ),
        auth={
            "anthropic": AuthStatus(authenticated=authenticated, method="oauth", expires_at=None)
        },
        models=ModelsSummary(default=default_model, configured=configured),
        providers={"anthropic": ProviderStatus(provider_type="anthropic", has_key=False)},
        counts=EntityCounts(skills=skills, stacks=stacks, hooks=hooks, models=len(configured)),
    )
