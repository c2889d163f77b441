"""Layered configuration loading, merging, and persistence.

The effective configuration is built from two JSON files:

- the user-global layer (~/.config/karl/karl.json), which replaces the
  built-in defaults wholesale when present
- the project layer (./.karl.json), whose models, providers and stacks are
  merged key-by-key over the global layer

A layer that is missing, unreadable or malformed is skipped; a broken
override must never stop the editor from opening. Only failures while
saving are reported to the user.
"""

from __future__ import annotations

import logging
from pathlib import Path

from karl_tui.config.paths import ConfigPaths
from karl_tui.config.types import (
    BUILTIN_TOOLS,
    Configuration,
    ConfigParseError,
    ModelEntry,
    ProviderEntry,
    StackEntry,
)

logger = logging.getLogger(__name__)


def load_config_file(path: Path) -> Configuration:
    """Read and parse one configuration file.

    Args:
        path: JSON file to read

    Returns:
        Parsed Configuration

    Raises:
        OSError: If the file cannot be read
        ConfigParseError: If the content is not a valid configuration
    """
    return Configuration.from_json(path.read_text(encoding="utf-8"))


def _try_load_layer(path: Path) -> Configuration | None:
    if not path.exists():
        return None
    try:
        return load_config_file(path)
    except (OSError, UnicodeDecodeError, ConfigParseError) as e:
        logger.debug("Skipping config layer %s: %s", path, e)
        return None


def merge_layers(base: Configuration, project: Configuration) -> Configuration:
    """Overlay a project layer onto a base configuration.

    Merge rules:
    - models, providers, stacks: key-by-key, project entries win
    - default_model: project value wins when non-empty
    - everything else (tools, volley, extra keys): base is kept

    Args:
        base: Configuration from defaults or the global layer
        project: Configuration parsed from the project layer

    Returns:
        Merged Configuration
    """
    return base.model_copy(
        update={
            "models": {**base.models, **project.models},
            "providers": {**base.providers, **project.providers},
            "stacks": {**base.stacks, **project.stacks},
            "default_model": (
                project.default_model if project.default_model else base.default_model
            ),
        }
    )


def load_merged(paths: ConfigPaths) -> tuple[Configuration, Path]:
    """Build the effective configuration and pick the save target.

    Args:
        paths: Locations of the global and project layers

    Returns:
        Tuple of (merged configuration, save target). The save target is the
        project file when it loaded, else the global file (whether or not it
        exists yet).
    """
    config = Configuration.default()
    source_path = paths.global_config_path

    global_layer = _try_load_layer(paths.global_config_path)
    if global_layer is not None:
        config = global_layer

    project_layer = _try_load_layer(paths.project_config_path)
    if project_layer is not None:
        config = merge_layers(config, project_layer)
        source_path = paths.project_config_path

    logger.debug("Loaded configuration, save target is %s", source_path)
    return config, source_path


def persist(config: Configuration, path: Path) -> None:
    """Write a configuration as pretty-printed JSON.

    Parent directories are created as needed. The write is not atomic.

    Raises:
        OSError: If the directory or file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = config.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    path.write_text(content + "\n", encoding="utf-8")


class ConfigStore:
    """Single owner of the in-memory Configuration.

    All writes go through the typed operations below, each of which swaps in
    a new immutable Configuration and marks the store dirty. Readers get the
    current value from `config`.
    """

    def __init__(self, config: Configuration, source_path: Path) -> None:
        self._config = config
        self._source_path = source_path
        self._dirty = False

    @classmethod
    def load(cls, paths: ConfigPaths) -> ConfigStore:
        config, source_path = load_merged(paths)
        return cls(config, source_path)

    @property
    def config(self) -> Configuration:
        return self._config

    @property
    def source_path(self) -> Path:
        return self._source_path

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    def save(self) -> None:
        """Persist to the save target and clear the dirty flag.

        Raises:
            OSError: If writing fails. The dirty flag is left untouched.
        """
        persist(self._config, self._source_path)
        self._dirty = False

    def _update(self, config: Configuration) -> None:
        self._config = config
        self._dirty = True

    # Models

    def put_model(self, alias: str, entry: ModelEntry, *, replaces: str | None) -> None:
        """Insert or overwrite a model, removing `replaces` first if it differs."""
        models = dict(self._config.models)
        if replaces is not None and replaces != alias:
            models.pop(replaces, None)
        models[alias] = entry
        self._update(self._config.model_copy(update={"models": models}))

    def remove_model(self, alias: str) -> None:
        models = {key: value for key, value in self._config.models.items() if key != alias}
        self._update(self._config.model_copy(update={"models": models}))

    def set_default_model(self, alias: str) -> None:
        self._update(self._config.model_copy(update={"default_model": alias}))

    # Providers

    def put_provider(self, name: str, entry: ProviderEntry) -> None:
        providers = {**self._config.providers, name: entry}
        self._update(self._config.model_copy(update={"providers": providers}))

    # Stacks

    def put_stack(self, name: str, entry: StackEntry, *, replaces: str | None) -> None:
        """Insert or overwrite a stack, removing `replaces` first if it differs."""
        stacks = dict(self._config.stacks)
        if replaces is not None and replaces != name:
            stacks.pop(replaces, None)
        stacks[name] = entry
        self._update(self._config.model_copy(update={"stacks": stacks}))

    def remove_stack(self, name: str) -> None:
        stacks = {key: value for key, value in self._config.stacks.items() if key != name}
        self._update(self._config.model_copy(update={"stacks": stacks}))

    # Tools

    def set_tool_enabled(self, name: str, enabled: bool) -> None:
        """Enable or disable a built-in tool.

        Raises:
            ValueError: If `name` is not a built-in tool
        """
        if name not in BUILTIN_TOOLS:
            raise ValueError(f"Not a built-in tool: {name}")
        current = self._config.tools.enabled
        if enabled:
            new_enabled = current if name in current else (*current, name)
        else:
            new_enabled = tuple(tool for tool in current if tool != name)
        tools = self._config.tools.model_copy(update={"enabled": new_enabled})
        self._update(self._config.model_copy(update={"tools": tools}))

    def add_custom_tool(self, path: str) -> None:
        custom = (*self._config.tools.custom, path)
        tools = self._config.tools.model_copy(update={"custom": custom})
        self._update(self._config.model_copy(update={"tools": tools}))

    def remove_custom_tool(self, path: str) -> None:
        custom = tuple(tool for tool in self._config.tools.custom if tool != path)
        tools = self._config.tools.model_copy(update={"custom": custom})
        self._update(self._config.model_copy(update={"tools": tools}))
