"""Records produced by filesystem discovery."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from karl_tui.config.types import StackEntry

INLINE_SOURCE = "inline"


@dataclass(frozen=True)
class SkillInfo:
    """Skill metadata read from a SKILL.md frontmatter block.

    Attributes:
        name: Skill name (falls back to the directory name)
        description: Free-text description, empty if absent
        license: License identifier, if declared
        path: Skill directory
    """

    name: str
    description: str
    license: str | None
    path: Path


@dataclass(frozen=True)
class HookInfo:
    """A hook script and the hook kind inferred from its filename."""

    name: str
    hook_type: str
    path: Path


@dataclass(frozen=True)
class StackItem:
    """A stack with its provenance.

    Attributes:
        name: Stack key (config key or file stem)
        entry: Stack definition
        source: INLINE_SOURCE for config-embedded stacks, else the file path
    """

    name: str
    entry: StackEntry
    source: str

    @property
    def is_inline(self) -> bool:
        return self.source == INLINE_SOURCE
