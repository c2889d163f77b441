"""Filesystem locations used by karl-tui."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

APP_NAME = "karl"


@dataclass(frozen=True)
class ConfigPaths:
    """Fixed locations of the two configuration layers and discovery roots.

    Attributes:
        global_config_dir: Per-user directory (~/.config/karl)
        project_dir: Working directory the editor was started in
    """

    global_config_dir: Path
    project_dir: Path

    @staticmethod
    def default() -> ConfigPaths:
        """Build production paths from the home and current directories."""
        return ConfigPaths(
            global_config_dir=Path.home() / ".config" / APP_NAME,
            project_dir=Path.cwd(),
        )

    @property
    def global_config_path(self) -> Path:
        return self.global_config_dir / f"{APP_NAME}.json"

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / f".{APP_NAME}.json"

    def discovery_roots(self, kind: str) -> tuple[Path, Path]:
        """Return the global and project-local roots for an entity kind.

        Args:
            kind: Directory name of the entity kind ("stacks", "skills", "hooks")

        Returns:
            Tuple of (global root, project root), in search order
        """
        return (self.global_config_dir / kind, self.project_dir / f".{APP_NAME}" / kind)
