"""Tests for Selector, ComboBox and Toggle."""

from karl_tui.tui.fields.choice import ComboBox, Selector, Toggle
from karl_tui.tui.keys import KeyEvent


def test_selector_wraps() -> None:
    """Selector cycles through options with wraparound."""
    selector = Selector(["a", "b", "c"])

    selector.handle_key(KeyEvent.named("left"))
    assert selector.selected_value() == "c"

    selector.handle_key(KeyEvent.named("right"))
    assert selector.selected_value() == "a"


def test_empty_selector() -> None:
    """An empty selector has no value."""
    selector = Selector([])

    selector.next()

    assert selector.is_empty()
    assert selector.selected_value() is None


def test_select_by_value_ignores_unknown() -> None:
    """select_by_value leaves the selection alone for unknown values."""
    selector = Selector(["a", "b"])

    selector.select_by_value("b")
    selector.select_by_value("z")

    assert selector.selected_value() == "b"


def test_combo_box_cycles_suggestions() -> None:
    """Left/Right copy the suggestion into the text."""
    combo = ComboBox(["m1", "m2"])
    assert combo.value == "m1"

    combo.handle_key(KeyEvent.named("right"))

    assert combo.value == "m2"


def test_combo_box_accepts_free_text() -> None:
    """Typing edits the value directly."""
    combo = ComboBox(["m1"])
    combo.handle_key(KeyEvent.named("ctrl+u"))
    for character in "custom":
        combo.handle_key(KeyEvent.typed(character))

    assert combo.value == "custom"


def test_combo_box_keeps_value_outside_options() -> None:
    """An initial value not among the suggestions is kept."""
    combo = ComboBox(["m1"], "other")

    assert combo.value == "other"


def test_combo_box_reset_options() -> None:
    """reset_options selects the first new suggestion."""
    combo = ComboBox(["m1"], "other")

    combo.reset_options(["x", "y"])

    assert combo.options == ["x", "y"]
    assert combo.value == "x"


def test_toggle() -> None:
    """Space and Enter flip a toggle; other keys do not."""
    toggle = Toggle("Default")

    assert toggle.handle_key(KeyEvent.typed(" "))
    assert toggle.value
    assert toggle.display() == "[x]"

    toggle.handle_key(KeyEvent.named("enter"))
    assert not toggle.value

    assert not toggle.handle_key(KeyEvent.typed("y"))


def test_empty_selector_ignores_keys() -> None:
    """An empty selector does not consume navigation keys."""
    selector = Selector([])

    assert not selector.handle_key(KeyEvent.named("right"))
    assert not selector.handle_key(KeyEvent.typed(" "))
