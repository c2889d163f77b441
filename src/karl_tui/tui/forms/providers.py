"""Static table of known providers and their default models.

Used by the setup wizard and to fill the model-id choices of the model form.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderOption:
    """A provider the wizard can set up.

    Attributes:
        key: Provider name written to the configuration
        name: Human-readable label
        auth_type: "oauth" or "api_key"
        provider_type: Provider kind tag written as the provider `type`
        base_url: Base URL written for API-key providers, if any
        default_models: (suggested alias, model id) pairs
    """

    key: str
    name: str
    auth_type: str
    provider_type: str
    base_url: str | None
    default_models: tuple[tuple[str, str], ...]

    @property
    def model_ids(self) -> list[str]:
        return [model_id for _, model_id in self.default_models]


CLAUDE_PRO_MAX = ProviderOption(
    key="claude-pro-max",
    name="Claude Pro/Max",
    auth_type="oauth",
    provider_type="anthropic",
    base_url=None,
    default_models=(
        ("haiku", "claude-haiku-4-5-20251001"),
        ("sonnet", "claude-sonnet-4-5-20250929"),
        ("opus", "claude-opus-4-5-20251101"),
    ),
)

ANTHROPIC = ProviderOption(
    key="anthropic",
    name="Anthropic API",
    auth_type="api_key",
    provider_type="anthropic",
    base_url=None,
    default_models=(
        ("fast", "claude-sonnet-4-20250514"),
        ("smart", "claude-opus-4-20250514"),
        ("haiku", "claude-haiku-3-5-20241022"),
    ),
)

OPENROUTER = ProviderOption(
    key="openrouter",
    name="OpenRouter",
    auth_type="api_key",
    provider_type="openai",
    base_url="https://openrouter.ai/api/v1",
    default_models=(
        ("mistral-small", "mistralai/mistral-small-creative"),
        ("devstral", "mistralai/devstral-2512:free"),
        ("mimo", "xiaomi/mimo-v2-flash:free"),
        ("grok", "x-ai/grok-4.1-fast"),
    ),
)

PROVIDER_OPTIONS: tuple[ProviderOption, ...] = (CLAUDE_PRO_MAX, ANTHROPIC, OPENROUTER)


def models_for_provider(key: str) -> list[str]:
    """Model ids offered for a provider name; empty for unknown providers."""
    for option in PROVIDER_OPTIONS:
        if option.key == key:
            return option.model_ids
    return []
