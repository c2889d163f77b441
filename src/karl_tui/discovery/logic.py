"""Read-only discovery of stacks, skills and hooks.

Each entity kind is searched under two roots, the global one first and then
the project-local `.karl/` directory. Discovery never mutates configuration
and never fails: unreadable directories and malformed entries are skipped
one at a time.
"""

from __future__ import annotations

import logging
from pathlib import Path

from frontmatter.default_handlers import YAMLHandler
from pydantic import ValidationError

from karl_tui.config.paths import ConfigPaths
from karl_tui.config.types import Configuration, StackEntry
from karl_tui.discovery.types import INLINE_SOURCE, HookInfo, SkillInfo, StackItem

logger = logging.getLogger(__name__)

SKILL_FILE_NAME = "SKILL.md"
HOOK_EXTENSIONS = frozenset({".js", ".ts", ".mjs"})

SKILL_METADATA_KEYS: tuple[str, ...] = ("name", "description", "license")

# Checked in order; the first substring found in the file stem wins.
HOOK_TYPES: tuple[str, ...] = ("pre-task", "post-task", "pre-tool", "post-tool", "on-error")
UNKNOWN_HOOK_TYPE = "unknown"


def classify_hook(name: str) -> str:
    """Infer the hook kind from a hook file stem."""
    for hook_type in HOOK_TYPES:
        if hook_type in name:
            return hook_type
    return UNKNOWN_HOOK_TYPE


def _list_dir(root: Path) -> list[Path]:
    if not root.is_dir():
        return []
    try:
        return sorted(root.iterdir())
    except OSError as e:
        logger.debug("Cannot read %s: %s", root, e)
        return []


def discover_stacks(config: Configuration, paths: ConfigPaths) -> list[StackItem]:
    """Union inline stacks with stack files found under the discovery roots.

    Inline entries take precedence over same-named files; among files, the
    first root wins.

    Args:
        config: Configuration holding inline stacks
        paths: Locations of the discovery roots

    Returns:
        Stack items sorted by name
    """
    by_name: dict[str, StackItem] = {
        name: StackItem(name=name, entry=entry, source=INLINE_SOURCE)
        for name, entry in config.stacks.items()
    }

    for root in paths.discovery_roots("stacks"):
        for path in _list_dir(root):
            if path.suffix != ".json" or not path.is_file():
                continue
            name = path.stem
            if name in by_name:
                continue
            entry = _load_stack_file(path)
            if entry is not None:
                by_name[name] = StackItem(name=name, entry=entry, source=str(path))

    return [by_name[name] for name in sorted(by_name)]


def _load_stack_file(path: Path) -> StackEntry | None:
    try:
        return StackEntry.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as e:
        logger.debug("Skipping stack file %s: %s", path, e)
        return None


def discover_skills(paths: ConfigPaths) -> list[SkillInfo]:
    """Find skill directories containing a SKILL.md file.

    Returns:
        Skills sorted by name
    """
    skills: list[SkillInfo] = []
    for root in paths.discovery_roots("skills"):
        for skill_dir in _list_dir(root):
            skill_file = skill_dir / SKILL_FILE_NAME
            if not skill_file.is_file():
                continue
            info = parse_skill_file(skill_file)
            if info is not None:
                skills.append(info)

    skills.sort(key=lambda skill: skill.name)
    return skills


def parse_skill_file(skill_file: Path) -> SkillInfo | None:
    """Read skill metadata from a SKILL.md frontmatter block.

    The block is read line by line as plain `key: value` pairs rather than
    as YAML, so descriptions may contain colons and `#` characters. A file
    without frontmatter, or without a `name:` key, is named after its
    directory.

    Args:
        skill_file: Path to SKILL.md

    Returns:
        SkillInfo, or None if the file cannot be read
    """
    skill_dir = skill_file.parent
    try:
        content = skill_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping skill %s: %s", skill_file, e)
        return None

    metadata = parse_frontmatter_fields(content)
    return SkillInfo(
        name=metadata.get("name") or skill_dir.name,
        description=metadata.get("description", ""),
        license=metadata.get("license"),
        path=skill_dir,
    )


def parse_frontmatter_fields(content: str) -> dict[str, str]:
    """Extract the known skill keys from a `---` delimited frontmatter block.

    Values are stripped of surrounding whitespace and double quotes.
    """
    handler = YAMLHandler()
    if not handler.detect(content):
        return {}
    try:
        block, _ = handler.split(content)
    except ValueError:
        # opening delimiter without a closing one
        return {}

    fields: dict[str, str] = {}
    for line in block.splitlines():
        stripped = line.strip()
        for key in SKILL_METADATA_KEYS:
            prefix = f"{key}:"
            if stripped.startswith(prefix):
                fields[key] = stripped[len(prefix) :].strip().strip('"')
    return fields


def discover_hooks(paths: ConfigPaths) -> list[HookInfo]:
    """Find hook scripts up to two directory levels below each root.

    Returns:
        Hooks sorted by name
    """
    hooks: list[HookInfo] = []
    seen: set[Path] = set()
    for root in paths.discovery_roots("hooks"):
        for path in _hook_candidates(root):
            if path in seen:
                continue
            seen.add(path)
            hooks.append(HookInfo(name=path.stem, hook_type=classify_hook(path.stem), path=path))

    hooks.sort(key=lambda hook: hook.name)
    return hooks


def _hook_candidates(root: Path) -> list[Path]:
    candidates: list[Path] = []
    for entry in _list_dir(root):
        if entry.is_dir():
            candidates.extend(child for child in _list_dir(entry) if _is_hook_file(child))
        elif _is_hook_file(entry):
            candidates.append(entry)
    return candidates


def _is_hook_file(path: Path) -> bool:
    return path.suffix in HOOK_EXTENSIONS and path.is_file()
