from .history import UndoRedoHistory, HistoryInfo
from .inline_editor import InlineContentEditor, EditSequence

__all__ = ["UndoRedoHistory", "HistoryInfo", "InlineContentEditor", "EditSequence"]
