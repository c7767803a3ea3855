from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel

from mdspace.model.entries_model import SNAPSHOT_CONFIG


class CollectionViewState(BaseModel):
    """
    The directory currently drilled into in the collection panel, plus the most
    recent non-null one so the panel can be reopened where it was. Both are plain
    paths resolved against the live tree when read, so a stale path just resolves
    to nothing.
    """

    model_config = SNAPSHOT_CONFIG

    current_collection_path: Optional[str] = None
    last_collection_path: Optional[str] = None


class EntrySelection(BaseModel):
    """
    Multi-selection in the file explorer. The anchor is where shift-click range
    extension starts.
    """

    model_config = SNAPSHOT_CONFIG

    selected_paths: FrozenSet[str] = frozenset()
    anchor_path: Optional[str] = None


class DirectorySets(BaseModel):
    """
    Expanded directories in the explorer tree and directories pinned to the
    sidebar, in the order they were added.
    """

    model_config = SNAPSHOT_CONFIG

    expanded: Tuple[str, ...] = ()
    pinned: Tuple[str, ...] = ()
