from typing import Optional, Tuple

from pydantic import BaseModel

from mdspace.model.collection_model import CollectionViewState, DirectorySets, EntrySelection
from mdspace.model.entries_model import Entry, SNAPSHOT_CONFIG
from mdspace.model.history_model import HistoryState


class WorkspaceState(BaseModel):
    """
    One consistent snapshot of the workspace tree and every view derived from it.
    Each update produces a new snapshot; parts that didn't change are shared.
    """

    model_config = SNAPSHOT_CONFIG

    workspace_path: Optional[str] = None
    entries: Tuple[Entry, ...] = ()
    open_path: Optional[str] = None
    history: HistoryState = HistoryState()
    collection: CollectionViewState = CollectionViewState()
    selection: EntrySelection = EntrySelection()
    directories: DirectorySets = DirectorySets()
