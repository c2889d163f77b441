"""Status document returned by `karl info --json`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from karl_tui.config.types import validation_messages


class KarlCliError(Exception):
    """The karl CLI ran but failed or produced unusable output."""


class _InfoModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ConfigLocations(_InfoModel):
    global_path: str
    project_path: str
    global_exists: bool
    project_exists: bool


class AuthStatus(_InfoModel):
    authenticated: bool
    method: str
    expires_at: str | None = None


class ModelsSummary(_InfoModel):
    default: str
    configured: tuple[str, ...]


class ProviderStatus(_InfoModel):
    provider_type: str = Field(alias="type")
    has_key: bool


class EntityCounts(_InfoModel):
    skills: int
    stacks: int
    hooks: int
    models: int


class CliInfo(_InfoModel):
    """Parsed `karl info --json` output.

    Attributes:
        version: CLI version string
        config: Config file locations and whether they exist
        auth: Per-provider authentication status
        models: Default alias and configured aliases
        providers: Per-provider type and API key presence
        counts: Number of discovered entities
    """

    version: str
    config: ConfigLocations
    auth: dict[str, AuthStatus]
    models: ModelsSummary
    providers: dict[str, ProviderStatus]
    counts: EntityCounts

    @staticmethod
    def from_json(content: str) -> CliInfo:
        """Parse the raw JSON printed by `karl info --json`.

        Raises:
            KarlCliError: If the output is not JSON or a key is missing or has
                the wrong type
        """
        try:
            return CliInfo.model_validate_json(content)
        except ValidationError as e:
            detail = "; ".join(validation_messages(e))
            raise KarlCliError(f"Unexpected karl info output: {detail}") from e


class CliState(Enum):
    LOADING = auto()
    LOADED = auto()
    NOT_AVAILABLE = auto()
    ERROR = auto()


@dataclass(frozen=True)
class CliStatus:
    """Result of fetching CLI info, as shown in the Settings section."""

    state: CliState
    info: CliInfo | None
    error: str | None

    @staticmethod
    def loading() -> CliStatus:
        return CliStatus(state=CliState.LOADING, info=None, error=None)

    @staticmethod
    def loaded(info: CliInfo) -> CliStatus:
        return CliStatus(state=CliState.LOADED, info=info, error=None)

    @staticmethod
    def not_available() -> CliStatus:
        return CliStatus(state=CliState.NOT_AVAILABLE, info=None, error=None)

    @staticmethod
    def failed(message: str) -> CliStatus:
        return CliStatus(state=CliState.ERROR, info=None, error=message)
