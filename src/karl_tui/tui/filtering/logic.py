"""Search predicates for each browsable section."""

from collections.abc import Callable

from karl_tui.discovery.types import HookInfo, SkillInfo, StackItem
from karl_tui.tui.data.types import ModelItem, ToolItem


def model_matches(query: str) -> Callable[[ModelItem], bool]:
    """Case-insensitive substring match on the model alias."""
    query_lower = query.lower()
    return lambda item: query_lower in item.alias.lower()


def stack_matches(query: str) -> Callable[[StackItem], bool]:
    query_lower = query.lower()
    return lambda item: query_lower in item.name.lower()


def skill_matches(query: str) -> Callable[[SkillInfo], bool]:
    """Case-insensitive substring match on skill name or description."""
    query_lower = query.lower()
    return lambda item: (
        query_lower in item.name.lower() or query_lower in item.description.lower()
    )


def tool_matches(query: str) -> Callable[[ToolItem], bool]:
    query_lower = query.lower()
    return lambda item: query_lower in item.name.lower()


def hook_matches(query: str) -> Callable[[HookInfo], bool]:
    query_lower = query.lower()
    return lambda item: query_lower in item.name.lower()
