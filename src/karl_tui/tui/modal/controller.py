"""Precedence-ordered modal contexts.

At most one context of each kind may be open. When several are open, the
kind declared first in ModalKind owns keyboard input; the others wait
underneath until it closes. Normal navigation only runs when nothing is
open.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from karl_tui.tui.dialogs.confirm import ConfirmDialog
from karl_tui.tui.fields.text import TextInput
from karl_tui.tui.forms.base import FormSession
from karl_tui.tui.views.types import Section
from karl_tui.tui.wizard.state import InitWizard


class ModalKind(Enum):
    """Modal contexts, highest precedence first."""

    WIZARD = auto()
    CONFIRM = auto()
    FORM = auto()
    SEARCH = auto()


@dataclass
class SearchModal:
    """Incremental search typing for one section.

    Attributes:
        section: Section whose list is being filtered
        query: Text input holding the query
    """

    section: Section
    query: TextInput


Modal = InitWizard | ConfirmDialog | FormSession | SearchModal


def modal_kind(modal: Modal) -> ModalKind:
    if isinstance(modal, InitWizard):
        return ModalKind.WIZARD
    if isinstance(modal, ConfirmDialog):
        return ModalKind.CONFIRM
    if isinstance(modal, FormSession):
        return ModalKind.FORM
    if isinstance(modal, SearchModal):
        return ModalKind.SEARCH
    raise TypeError(f"Not a modal context: {type(modal).__name__}")


class ModalController:
    """Holds the open modal contexts and answers which one is active."""

    def __init__(self) -> None:
        self._open: dict[ModalKind, Modal] = {}

    def open(self, modal: Modal) -> None:
        """Open a modal context.

        Raises:
            ValueError: If a context of the same kind is already open
        """
        kind = modal_kind(modal)
        if kind in self._open:
            raise ValueError(f"{kind.name} is already open")
        self._open[kind] = modal

    def close(self, kind: ModalKind) -> None:
        self._open.pop(kind, None)

    def is_open(self, kind: ModalKind) -> bool:
        return kind in self._open

    def active(self) -> ModalKind | None:
        """The highest-precedence open kind, or None when in normal mode."""
        for kind in ModalKind:
            if kind in self._open:
                return kind
        return None

    @property
    def wizard(self) -> InitWizard | None:
        modal = self._open.get(ModalKind.WIZARD)
        assert modal is None or isinstance(modal, InitWizard)
        return modal

    @property
    def confirm(self) -> ConfirmDialog | None:
        modal = self._open.get(ModalKind.CONFIRM)
        assert modal is None or isinstance(modal, ConfirmDialog)
        return modal

    @property
    def form(self) -> FormSession | None:
        modal = self._open.get(ModalKind.FORM)
        assert modal is None or isinstance(modal, FormSession)
        return modal

    @property
    def search(self) -> SearchModal | None:
        modal = self._open.get(ModalKind.SEARCH)
        assert modal is None or isinstance(modal, SearchModal)
        return modal
