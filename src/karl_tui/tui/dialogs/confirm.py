"""Blocking yes/no prompt and the actions it guards."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class PendingActionKind(Enum):
    DELETE_MODEL = auto()
    DELETE_STACK = auto()
    DELETE_TOOL = auto()
    QUIT = auto()


@dataclass(frozen=True)
class PendingAction:
    """An action waiting for confirmation.

    Attributes:
        kind: What to do once confirmed
        target: Key of the entity to delete; empty for QUIT
    """

    kind: PendingActionKind
    target: str

    @staticmethod
    def quit() -> PendingAction:
        return PendingAction(kind=PendingActionKind.QUIT, target="")


class ConfirmDialog:
    """Yes/No prompt; "No" is selected when the dialog opens."""

    def __init__(
        self,
        title: str,
        message: str,
        action: PendingAction,
        *,
        confirm_label: str = "Yes",
        cancel_label: str = "No",
    ) -> None:
        self.title = title
        self.message = message
        self.action = action
        self.confirm_label = confirm_label
        self.cancel_label = cancel_label
        self.confirm_selected = False

    def toggle(self) -> None:
        self.confirm_selected = not self.confirm_selected

    def select_confirm(self) -> None:
        self.confirm_selected = True

    def select_cancel(self) -> None:
        self.confirm_selected = False

    def is_confirmed(self) -> bool:
        return self.confirm_selected
