from typing import Any, NamedTuple, Optional, Tuple

from pydantic import BaseModel

from mdspace.model.entries_model import SNAPSHOT_CONFIG


class HistoryEntry(BaseModel):
    """
    One visit in navigation history. The selection is caret or range state owned
    by the editor and is carried along without being examined.
    """

    model_config = SNAPSHOT_CONFIG

    path: str
    selection: Any = None


class HistoryState(BaseModel):
    """
    The back/forward history stack, oldest first, with the index of the entry
    currently being visited. The index is -1 exactly when there are no entries.
    """

    model_config = SNAPSHOT_CONFIG

    entries: Tuple[HistoryEntry, ...] = ()
    index: int = -1

    @property
    def current(self) -> Optional[HistoryEntry]:
        if 0 <= self.index < len(self.entries):
            return self.entries[self.index]
        return None

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(entry.path for entry in self.entries)

    def is_consistent(self) -> bool:
        if not self.entries:
            return self.index == -1
        return 0 <= self.index < len(self.entries)

    def __str__(self) -> str:
        return f"HistoryState({len(self.entries)} entries, index {self.index})"


class HistoryAppendResult(NamedTuple):
    state: HistoryState
    did_change: bool


class HistoryTarget(NamedTuple):
    index: int
    entry: HistoryEntry
