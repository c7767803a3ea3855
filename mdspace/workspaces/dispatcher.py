"""
Applies filesystem mutations reported by the watcher to every view derived from
the workspace tree.

Each handler fans out in a fixed order: history, collection, selection, then
expanded and pinned directories. Every sub-update is computed from the same
incoming state, so none of them sees another's result, and the new state is
assembled once at the end.
"""

from typing import Optional

from mdspace.config.logger import get_logger
from mdspace.errors import InvalidInput
from mdspace.model.collection_model import CollectionViewState
from mdspace.model.events_model import (
    EntriesDeleted,
    EntryCreated,
    EntryMoved,
    EntryRenamed,
    WorkspaceEvent,
)
from mdspace.model.history_model import HistoryState
from mdspace.model.workspace_model import WorkspaceState
from mdspace.util.format_utils import fmt_count_items, fmt_lines, fmt_rewrite
from mdspace.util.path_utils import is_path_in_paths, normalize, replace_prefix
from mdspace.workspaces import collection_state, directory_sets, history, selection_state

log = get_logger(__name__)


def on_entry_created(state: WorkspaceState, event: EntryCreated) -> WorkspaceState:
    log.info("Entry created: %s", event.entry)

    collection = collection_state.on_entry_created(state.collection, event)

    # A new directory becomes the only selected entry and the anchor.
    selection = state.selection
    directories = state.directories
    if event.entry.is_directory:
        selection = selection_state.select_only(event.entry.path)
        if selection == state.selection:
            selection = state.selection
        to_expand = [event.entry.path]
        if event.parent_path != state.workspace_path:
            to_expand.insert(0, event.parent_path)
        expanded = directory_sets.add_expanded(directories.expanded, to_expand)
        if expanded is not directories.expanded:
            directories = directories.model_copy(update={"expanded": expanded})

    return _assemble(state, collection=collection, selection=selection, directories=directories)


def on_entries_deleted(state: WorkspaceState, event: EntriesDeleted) -> WorkspaceState:
    paths = list(event.paths)
    log.info("%s deleted:\n%s", fmt_count_items(len(paths), "entry"), fmt_lines(paths))

    new_history = history.remove_paths(state.history, paths)
    collection = collection_state.on_entries_deleted(state.collection, event)
    selection = selection_state.purge_paths(state.selection, paths)
    directories = directory_sets.on_directory_removed(state.directories, paths)

    open_path = state.open_path
    if open_path is not None and is_path_in_paths(open_path, paths):
        open_path = _fallback_open_path(new_history)
        log.info("Open document was deleted, now showing: %s", open_path)

    return _assemble(
        state,
        history=new_history,
        collection=collection,
        selection=selection,
        directories=directories,
        open_path=open_path,
    )


def on_entry_renamed(state: WorkspaceState, event: EntryRenamed) -> WorkspaceState:
    log.info("Entry renamed: %s", fmt_rewrite(event.old_path, event.new_path))
    return _on_relocated(
        state,
        event.old_path,
        event.new_path,
        event.is_directory,
        collection_state.on_entry_renamed(state.collection, event),
    )


def on_entry_moved(state: WorkspaceState, event: EntryMoved) -> WorkspaceState:
    log.info("Entry moved: %s", fmt_rewrite(event.source_path, event.new_path))
    return _on_relocated(
        state,
        event.source_path,
        event.new_path,
        event.is_directory,
        collection_state.on_entry_moved(state.collection, event),
    )


def dispatch(state: WorkspaceState, event: WorkspaceEvent) -> WorkspaceState:
    """
    Apply any single mutation event.
    """
    match event:
        case EntryCreated():
            return on_entry_created(state, event)
        case EntriesDeleted():
            return on_entries_deleted(state, event)
        case EntryRenamed():
            return on_entry_renamed(state, event)
        case EntryMoved():
            return on_entry_moved(state, event)
        case _:
            raise InvalidInput(f"Not a workspace event: {event!r}")


def _on_relocated(
    state: WorkspaceState,
    old_path: str,
    new_path: str,
    is_directory: bool,
    collection: CollectionViewState,
) -> WorkspaceState:
    # A file rename matches only that path, in either separator style. A
    # directory rename carries everything below it along.
    new_history = history.rewrite_paths(state.history, old_path, new_path, cascade=is_directory)
    selection = selection_state.purge_paths(state.selection, [old_path])
    directories = state.directories
    if is_directory:
        directories = directory_sets.on_directory_renamed(directories, old_path, new_path)

    open_path = state.open_path
    if open_path is not None:
        if is_directory:
            open_path = replace_prefix(open_path, old_path, new_path)
        elif normalize(open_path) == normalize(old_path):
            open_path = new_path

    return _assemble(
        state,
        history=new_history,
        collection=collection,
        selection=selection,
        directories=directories,
        open_path=open_path,
    )


def _fallback_open_path(new_history: HistoryState) -> Optional[str]:
    current = new_history.current
    return current.path if current else None


def _assemble(state: WorkspaceState, **updates) -> WorkspaceState:
    changed = {key: value for key, value in updates.items() if value is not getattr(state, key)}
    if not changed:
        return state
    return state.model_copy(update=changed)
