"""Filter-preserving selection list used by every browsable section."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Generic, TypeVar

T = TypeVar("T")


class FilteredCollection(Generic[T]):
    """Ordered items, a visible subset chosen by a predicate, and one selection.

    The selection is a position within the visible subset, not an item
    identity. When a filter change pushes the position out of bounds it
    resets to the first visible item; otherwise the position is kept even if
    a different item now sits there.

    None of the operations raise; an empty visible set simply means there is
    no selection.
    """

    def __init__(self, items: Sequence[T] = ()) -> None:
        self._items: list[T] = []
        self._visible: list[int] = []
        self._selection: int | None = None
        self.replace_all(items)

    def replace_all(self, new_items: Sequence[T]) -> None:
        """Reset to new items with no filter and the first item selected.

        Any previously applied filter is discarded; callers re-apply it.
        """
        self._items = list(new_items)
        self._visible = list(range(len(self._items)))
        self._selection = 0 if self._visible else None

    def apply_filter(self, predicate: Callable[[T], bool]) -> None:
        self._visible = [index for index, item in enumerate(self._items) if predicate(item)]
        if not self._visible:
            self._selection = None
        elif self._selection is None or self._selection >= len(self._visible):
            self._selection = 0

    def clear_filter(self) -> None:
        self._visible = list(range(len(self._items)))
        if self._selection is None and self._visible:
            self._selection = 0

    def select(self, position: int) -> None:
        """Select a position within the visible items; out-of-range positions are ignored."""
        if 0 <= position < len(self._visible):
            self._selection = position

    def next(self) -> None:
        if not self._visible:
            return
        if self._selection is None:
            self._selection = 0
        else:
            self._selection = (self._selection + 1) % len(self._visible)

    def previous(self) -> None:
        if not self._visible:
            return
        if self._selection is None:
            self._selection = 0
        else:
            self._selection = (self._selection - 1) % len(self._visible)

    @property
    def selection(self) -> int | None:
        """Selected position within the visible items."""
        return self._selection

    @property
    def visible_indices(self) -> list[int]:
        return list(self._visible)

    def selected(self) -> T | None:
        index = self.selected_absolute_index()
        if index is None:
            return None
        return self._items[index]

    def selected_absolute_index(self) -> int | None:
        """Index of the selected item within the unfiltered items."""
        if self._selection is None or self._selection >= len(self._visible):
            return None
        return self._visible[self._selection]

    def visible_count(self) -> int:
        return len(self._visible)

    def total_count(self) -> int:
        return len(self._items)

    def iterate_visible(self) -> Iterator[T]:
        return (self._items[index] for index in self._visible)
