"""Section and view types for the editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Section(Enum):
    """Sections of the editor page, in display order."""

    SETTINGS = auto()
    MODELS = auto()
    STACKS = auto()
    SKILLS = auto()
    TOOLS = auto()
    HOOKS = auto()


class View(Enum):
    """View within the current section."""

    LIST = auto()
    DETAIL = auto()


@dataclass(frozen=True)
class SectionConfig:
    """Static capabilities of a section.

    Attributes:
        section: The section this config describes
        display_name: Human-readable name
        key_hint: Number key that jumps to the section
        searchable: Whether "/" opens a search box
        can_create: Whether "n" opens a create form
        can_edit: Whether "e" opens an edit form
    """

    section: Section
    display_name: str
    key_hint: str
    searchable: bool
    can_create: bool
    can_edit: bool


SECTION_CONFIGS: tuple[SectionConfig, ...] = (
    SectionConfig(Section.SETTINGS, "Settings", "1", False, False, False),
    SectionConfig(Section.MODELS, "Models", "2", True, True, True),
    SectionConfig(Section.STACKS, "Stacks", "3", True, True, True),
    SectionConfig(Section.SKILLS, "Skills", "4", True, False, False),
    SectionConfig(Section.TOOLS, "Tools", "5", True, True, False),
    SectionConfig(Section.HOOKS, "Hooks", "6", True, False, False),
)


def get_section_config(section: Section) -> SectionConfig:
    for config in SECTION_CONFIGS:
        if config.section == section:
            return config
    raise AssertionError(f"No config for {section}")


def section_for_key(key_hint: str) -> Section | None:
    """Look up the section bound to a number key, if any."""
    for config in SECTION_CONFIGS:
        if config.key_hint == key_hint:
            return config.section
    return None


def next_section(section: Section) -> Section:
    sections = [config.section for config in SECTION_CONFIGS]
    return sections[(sections.index(section) + 1) % len(sections)]


def previous_section(section: Section) -> Section:
    sections = [config.section for config in SECTION_CONFIGS]
    return sections[(sections.index(section) - 1) % len(sections)]
