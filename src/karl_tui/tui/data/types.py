"""Row types for the browsable lists.

Rows are snapshots copied out of the Configuration at refresh time; they
never alias store state.
"""

from dataclasses import dataclass

from karl_tui.config.types import ModelEntry, ProviderEntry


@dataclass(frozen=True)
class ModelItem:
    """A model alias row."""

    alias: str
    entry: ModelEntry
    is_default: bool


@dataclass(frozen=True)
class ToolItem:
    """A tool row.

    Attributes:
        name: Built-in tool name, or the executable path of a custom tool
        enabled: Whether the tool is enabled (custom tools always are)
        is_builtin: True for bash/read/write/edit
    """

    name: str
    enabled: bool
    is_builtin: bool


@dataclass(frozen=True)
class ProviderItem:
    """A configured provider, shown in the Settings section."""

    name: str
    entry: ProviderEntry
