"""Configuration data model and its JSON mapping.

Every entity is a frozen pydantic model. ConfigStore replaces entities
wholesale instead of mutating them, so a failed operation can never leave a
partially updated Configuration behind.

JSON keys are lower camel case. Keys this module does not know about are
kept as pydantic extras (`model_extra`) and written back unchanged.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    ValidationError,
)
from pydantic.alias_generators import to_camel

DEFAULT_MODEL_ALIAS = "fast"
BUILTIN_TOOLS: tuple[str, ...] = ("bash", "read", "write", "edit")

NonNegativeInt = Annotated[StrictInt, Field(ge=0)]


class ConfigParseError(ValueError):
    """Raised when a JSON document does not have the configuration shape."""


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk JSON shape, omitting unset optional keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ModelEntry(_ConfigModel):
    """A model alias target.

    Attributes:
        provider: Name of the provider entry serving this model
        model: Provider-specific model identifier
    """

    provider: str = ""
    model: str = ""


class ProviderEntry(_ConfigModel):
    """A provider connection.

    Attributes:
        provider_type: Provider kind tag (e.g. "anthropic", "openai")
        base_url: Optional API base URL override
        api_key: Optional API key
        auth_type: Optional auth kind ("oauth" or "api_key")
    """

    provider_type: str = Field(default="", alias="type")
    base_url: str | None = None
    api_key: str | None = None
    auth_type: str | None = None


class ToolSettings(_ConfigModel):
    """Enabled built-in tool names plus custom tool executable paths."""

    enabled: tuple[str, ...] = BUILTIN_TOOLS
    custom: tuple[str, ...] = ()


class RetryPolicy(_ConfigModel):
    """Concurrency and retry settings (the `volley` block)."""

    max_concurrent: NonNegativeInt = 3
    retry_attempts: NonNegativeInt = 3
    retry_backoff: str = "exponential"


class StackEntry(_ConfigModel):
    """A prompt stack definition.

    The temperature range (0.0 - 2.0) is not checked here; forms enforce
    what users type, files are taken as written.
    """

    name: str | None = None
    extends: str | None = None
    model: str | None = None
    temperature: StrictFloat | None = None
    timeout: NonNegativeInt | None = None
    max_tokens: NonNegativeInt | None = None
    skill: str | None = None
    context: str | None = None
    context_file: str | None = None
    unrestricted: StrictBool | None = None


class Configuration(_ConfigModel):
    """The merged karl configuration.

    `default_model` should name a key of `models`, but a dangling alias is
    tolerated and simply means "no default".
    """

    default_model: str = DEFAULT_MODEL_ALIAS
    models: dict[str, ModelEntry] = Field(default_factory=dict)
    providers: dict[str, ProviderEntry] = Field(default_factory=dict)
    tools: ToolSettings = Field(default_factory=ToolSettings)
    volley: RetryPolicy = Field(default_factory=RetryPolicy)
    stacks: dict[str, StackEntry] = Field(default_factory=dict)

    @staticmethod
    def default() -> Configuration:
        """Create the built-in defaults used before any layer is loaded."""
        return Configuration()

    @property
    def default_model_entry(self) -> ModelEntry | None:
        return self.models.get(self.default_model)

    @staticmethod
    def from_json(content: str) -> Configuration:
        """Parse a JSON document into a Configuration.

        Args:
            content: Raw file content

        Returns:
            Configuration with defaults for every missing key

        Raises:
            ConfigParseError: If the content is not JSON or does not have the
                expected shape
        """
        try:
            return Configuration.model_validate_json(content)
        except ValidationError as e:
            raise ConfigParseError("; ".join(validation_messages(e))) from e


def validation_messages(exc: ValidationError) -> list[str]:
    """Extract human-readable error messages from a pydantic ValidationError."""
    messages: list[str] = []
    for error in exc.errors():
        field_path = ".".join(str(part) for part in error.get("loc", ()))
        msg = error.get("msg", "validation error")
        if field_path:
            messages.append(f"Field '{field_path}' {msg}")
        else:
            messages.append(msg)
    return messages
