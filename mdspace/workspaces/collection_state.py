"""
Collection view state: which directory is drilled into in the collection panel,
and how filesystem mutations move or clear it.
"""

from typing import List, Optional, Sequence

from mdspace.config.logger import get_logger
from mdspace.model.collection_model import CollectionViewState
from mdspace.model.entries_model import Entry
from mdspace.model.events_model import EntriesDeleted, EntryCreated, EntryMoved, EntryRenamed
from mdspace.util.path_utils import has_suffix, is_path_in_paths, replace_prefix
from mdspace.workspaces.entry_index import EntryIndex, find_entry

log = get_logger(__name__)

CLOSED_COLLECTION = CollectionViewState()


def compute_collection_entries(
    collection_path: Optional[str], index: EntryIndex, suffixes: Sequence[str] = (".md",)
) -> List[Entry]:
    """
    The files shown in the collection panel: direct non-directory children of the
    collection directory whose names have one of the given suffixes (any file if
    `suffixes` is empty). Always derived from the live tree, never patched.
    """
    directory = find_entry(index, collection_path)
    if directory is None or not directory.is_directory or not directory.children:
        return []
    return [
        child
        for child in directory.children
        if not child.is_directory and has_suffix(child.name, suffixes)
    ]


def open_collection(state: CollectionViewState, path: Optional[str]) -> CollectionViewState:
    """
    Drill into `path`, or close the panel if `path` is None. The last path is only
    ever set to a non-null value.
    """
    last_path = path if path is not None else state.last_collection_path
    return _updated(state, path, last_path)


def toggle_collection_view(state: CollectionViewState) -> CollectionViewState:
    """
    Close the panel if it is open, otherwise reopen the last collection (if any).
    """
    if state.current_collection_path is not None:
        return _updated(state, None, state.last_collection_path)
    elif state.last_collection_path is not None:
        return _updated(state, state.last_collection_path, state.last_collection_path)
    return state


def clear_last_collection_path(state: CollectionViewState) -> CollectionViewState:
    return _updated(state, state.current_collection_path, None)


def reset_collection(state: CollectionViewState) -> CollectionViewState:
    return CLOSED_COLLECTION


def on_entry_created(state: CollectionViewState, event: EntryCreated) -> CollectionViewState:
    """
    A newly created directory becomes the active collection. Creating a file
    leaves the collection alone.
    """
    if not event.entry.is_directory:
        return state
    log.debug("Switching collection to new directory: %s", event.entry.path)
    return _updated(state, event.entry.path, event.entry.path)


def on_entries_deleted(state: CollectionViewState, event: EntriesDeleted) -> CollectionViewState:
    """
    Clear the current and last paths, each independently, if they were deleted
    along with an ancestor.
    """
    current_path = _clear_if_deleted(state.current_collection_path, event.paths)
    last_path = _clear_if_deleted(state.last_collection_path, event.paths)
    return _updated(state, current_path, last_path)


def on_entry_renamed(state: CollectionViewState, event: EntryRenamed) -> CollectionViewState:
    return _rewrite(state, event.old_path, event.new_path)


def on_entry_moved(state: CollectionViewState, event: EntryMoved) -> CollectionViewState:
    return _rewrite(state, event.source_path, event.new_path)


def _rewrite(state: CollectionViewState, old_path: str, new_path: str) -> CollectionViewState:
    return _updated(
        state,
        _replace_optional(state.current_collection_path, old_path, new_path),
        _replace_optional(state.last_collection_path, old_path, new_path),
    )


def _replace_optional(path: Optional[str], old_path: str, new_path: str) -> Optional[str]:
    if path is None:
        return None
    return replace_prefix(path, old_path, new_path)


def _clear_if_deleted(path: Optional[str], deleted_paths: Sequence[str]) -> Optional[str]:
    if path is not None and is_path_in_paths(path, deleted_paths):
        return None
    return path


def _updated(
    state: CollectionViewState, current_path: Optional[str], last_path: Optional[str]
) -> CollectionViewState:
    if (
        current_path == state.current_collection_path
        and last_path == state.last_collection_path
    ):
        return state
    return CollectionViewState(
        current_collection_path=current_path,
        last_collection_path=last_path,
    )
