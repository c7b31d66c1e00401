"""
Linear undo/redo history for editor state.

``past`` holds older states (most recent last), ``future`` holds undone states
(most recent first). Any ``set`` after an undo discards the redo branch.
"""

from dataclasses import dataclass
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class HistoryInfo:
    past: int
    future: int
    total: int


class UndoRedoHistory(Generic[T]):
    def __init__(self, initial: T):
        self.past: List[T] = []
        self.present: T = initial
        self.future: List[T] = []

    @property
    def state(self) -> T:
        return self.present

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0

    @property
    def history_info(self) -> HistoryInfo:
        return HistoryInfo(
            past=len(self.past),
            future=len(self.future),
            total=len(self.past) + len(self.future) + 1,
        )

    def set(self, value: T) -> None:
        self.past.append(self.present)
        self.present = value
        self.future = []

    def undo(self) -> T:
        if not self.can_undo:
            return self.present
        self.future.insert(0, self.present)
        self.present = self.past.pop()
        return self.present

    def redo(self) -> T:
        if not self.can_redo:
            return self.present
        self.past.append(self.present)
        self.present = self.future.pop(0)
        return self.present

    def reset(self, value: T) -> None:
        """Replace the present and drop all history."""
        self.past = []
        self.present = value
        self.future = []

    def clear_history(self) -> None:
        self.past = []
        self.future = []

    def __repr__(self) -> str:
        info = self.history_info
        return f"<UndoRedoHistory past={info.past} future={info.future}>"
