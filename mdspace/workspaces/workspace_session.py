"""
A `WorkspaceSession` owns the current `WorkspaceState` snapshot. UI actions and
watcher events both go through it, one at a time, and each one replaces the
snapshot with a new one.
"""

import threading
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from mdspace.config.logger import get_logger
from mdspace.config.settings import global_settings
from mdspace.errors import InvalidOperation, InvalidState, is_fatal, UnexpectedError
from mdspace.model.entries_model import Entry
from mdspace.model.events_model import (
    EntriesDeleted,
    EntryCreated,
    EntryMoved,
    EntryRenamed,
    WorkspaceEvent,
    parse_event,
)
from mdspace.model.history_model import HistoryEntry, HistoryState
from mdspace.model.workspace_model import WorkspaceState
from mdspace.util.format_utils import fmt_path
from mdspace.util.path_utils import is_equal_or_descendant
from mdspace.workspaces import (
    collection_state,
    directory_sets,
    dispatcher,
    history as history_stack,
    selection_state,
)
from mdspace.workspaces.entry_index import build_index

log = get_logger(__name__)

Opener = Callable[[HistoryEntry], Any]
"""
Opens a document when navigating history. Raising means the document could not
be opened, and history is left where it was.
"""


class WorkspaceSession:
    def __init__(
        self,
        workspace_path: Optional[str] = None,
        entries: Sequence[Entry] = (),
        max_history_length: Optional[int] = None,
        collection_file_suffixes: Optional[Sequence[str]] = None,
    ):
        settings = global_settings()
        if max_history_length is None:
            max_history_length = settings.max_history_length
        if max_history_length < 1:
            raise InvalidState(f"History length must be at least 1: {max_history_length}")
        self.max_history_length = max_history_length
        self.collection_file_suffixes = tuple(
            settings.collection_file_suffixes
            if collection_file_suffixes is None
            else collection_file_suffixes
        )
        self._lock = threading.RLock()
        self._state = WorkspaceState(workspace_path=workspace_path, entries=tuple(entries))
        self._index_source: Optional[Tuple[Entry, ...]] = None
        self._index: Dict[str, Entry] = {}

    def __str__(self):
        return f"WorkspaceSession({fmt_path(self._state.workspace_path or '')}, {self._state.history})"

    @property
    def state(self) -> WorkspaceState:
        return self._state

    def _set_state(self, new_state: WorkspaceState) -> bool:
        if new_state is self._state:
            return False
        if not new_state.history.is_consistent():
            raise UnexpectedError(f"Inconsistent history: {new_state.history}")
        self._state = new_state
        return True

    def _entry_index(self) -> Dict[str, Entry]:
        # Rebuilt whenever the tree snapshot is replaced, never patched.
        entries = self._state.entries
        if entries is not self._index_source:
            self._index = build_index(entries)
            self._index_source = entries
        return self._index

    ## Tree

    def replace_tree(self, entries: Sequence[Entry], workspace_path: Optional[str] = None) -> None:
        """
        Install a freshly scanned tree. Expanded and pinned directories that no
        longer exist are dropped.
        """
        with self._lock:
            state = self._state
            workspace_path = workspace_path or state.workspace_path
            roots = tuple(entries)
            directories = directory_sets.sync_with_entries(state.directories, roots, workspace_path)
            self._set_state(
                state.model_copy(
                    update={
                        "entries": roots,
                        "workspace_path": workspace_path,
                        "directories": directories,
                    }
                )
            )
            log.debug("Replaced tree: %s root entries", len(roots))

    ## Navigation

    def open_path(self, path: str, selection: Any = None) -> bool:
        """
        Record that a document was opened. Returns whether history changed.
        """
        with self._lock:
            state = self._state
            result = history_stack.append(
                state.history, HistoryEntry(path=path, selection=selection), self.max_history_length
            )
            updates: Dict[str, Any] = {"open_path": path}
            if result.did_change:
                updates["history"] = result.state
                log.info("Opened: %s", fmt_path(path))
            if result.did_change or state.open_path != path:
                self._set_state(state.model_copy(update=updates))
            return result.did_change

    def commit_selection(self, selection: Any) -> None:
        with self._lock:
            new_history = history_stack.commit_selection(self._state.history, selection)
            if new_history is not self._state.history:
                self._set_state(self._state.model_copy(update={"history": new_history}))

    def go_back(self, opener: Optional[Opener] = None) -> bool:
        return self._go(-1, opener)

    def go_forward(self, opener: Optional[Opener] = None) -> bool:
        return self._go(1, opener)

    def _go(self, delta: int, opener: Optional[Opener]) -> bool:
        with self._lock:
            target = history_stack.navigate(self._state.history, delta)
            if target is None:
                return False
            if opener:
                try:
                    opener(target.entry)
                except Exception as e:
                    log.warning("Could not open %s: %s", fmt_path(target.entry.path), e)
                    if is_fatal(e):
                        log.info("Opener failed:", exc_info=e)
                    return False
            new_history = history_stack.commit_index(self._state.history, target.index)
            self._set_state(
                self._state.model_copy(update={"history": new_history, "open_path": target.entry.path})
            )
            log.debug("Navigated to %s: %s", target.index, fmt_path(target.entry.path))
            return True

    def can_go_back(self) -> bool:
        return history_stack.can_go_back(self._state.history)

    def can_go_forward(self) -> bool:
        return history_stack.can_go_forward(self._state.history)

    def clear_history(self) -> None:
        with self._lock:
            self._set_state(self._state.model_copy(update={"history": history_stack.EMPTY_HISTORY}))

    def hydrate_from_opened_files(self, paths: Sequence[str], initial_path: Optional[str] = None) -> None:
        """
        Start history from a list of files opened at launch.
        """
        with self._lock:
            new_history = history_stack.hydrate(
                paths, self.max_history_length, self.collection_file_suffixes, initial_path
            )
            current = new_history.current
            self._set_state(
                self._state.model_copy(
                    update={
                        "history": new_history,
                        "open_path": current.path if current else self._state.open_path,
                    }
                )
            )

    ## Collection

    def open_collection(self, path: Optional[str]) -> None:
        with self._lock:
            self._update_collection(collection_state.open_collection(self._state.collection, path))

    def toggle_collection_view(self) -> None:
        with self._lock:
            self._update_collection(collection_state.toggle_collection_view(self._state.collection))

    def reset_collection(self) -> None:
        with self._lock:
            self._update_collection(collection_state.reset_collection(self._state.collection))

    def _update_collection(self, collection) -> None:
        if collection is not self._state.collection:
            self._set_state(self._state.model_copy(update={"collection": collection}))

    ## Selection

    def select_only(self, path: str) -> None:
        with self._lock:
            self._update_selection(selection_state.select_only(path))

    def set_selection(self, paths: Sequence[str], anchor_path: Optional[str] = None) -> None:
        with self._lock:
            self._update_selection(selection_state.set_selection(paths, anchor_path))

    def toggle_selection(self, path: str) -> None:
        with self._lock:
            self._update_selection(selection_state.toggle_path(self._state.selection, path))

    def extend_selection(self, path: str, visible_order: Sequence[str]) -> None:
        with self._lock:
            self._update_selection(
                selection_state.extend_to(self._state.selection, path, visible_order)
            )

    def reset_selection(self) -> None:
        with self._lock:
            self._update_selection(selection_state.EMPTY_SELECTION)

    def _update_selection(self, selection) -> None:
        if selection != self._state.selection:
            self._set_state(self._state.model_copy(update={"selection": selection}))

    ## Directories

    def toggle_directory(self, path: str) -> None:
        with self._lock:
            sets = self._state.directories
            expanded = directory_sets.toggle_expanded(sets.expanded, path)
            self._update_directories(sets.model_copy(update={"expanded": expanded}))

    def pin_directory(self, path: str) -> None:
        with self._lock:
            workspace_path = self._state.workspace_path
            if workspace_path and not is_equal_or_descendant(path, workspace_path):
                raise InvalidOperation(f"Cannot pin a directory outside the workspace: {fmt_path(path)}")
            sets = self._state.directories
            pinned = directory_sets.pin(sets.pinned, path)
            if pinned is not sets.pinned:
                self._update_directories(sets.model_copy(update={"pinned": pinned}))

    def restore_pinned_directories(self, paths: Sequence[object]) -> None:
        """
        Load pins saved in user settings, keeping only those inside this workspace.
        """
        with self._lock:
            sets = self._state.directories
            pinned = directory_sets.filter_pins_for_workspace(
                directory_sets.normalize_pins(paths), self._state.workspace_path
            )
            if pinned != sets.pinned:
                self._update_directories(sets.model_copy(update={"pinned": pinned}))

    def unpin_directory(self, path: str) -> None:
        with self._lock:
            sets = self._state.directories
            pinned = directory_sets.unpin(sets.pinned, path)
            if pinned is not sets.pinned:
                self._update_directories(sets.model_copy(update={"pinned": pinned}))

    def _update_directories(self, sets) -> None:
        self._set_state(self._state.model_copy(update={"directories": sets}))

    ## Events

    def on_entry_created(self, event: EntryCreated) -> None:
        self.dispatch(event)

    def on_entries_deleted(self, event: EntriesDeleted) -> None:
        self.dispatch(event)

    def on_entry_renamed(self, event: EntryRenamed) -> None:
        self.dispatch(event)

    def on_entry_moved(self, event: EntryMoved) -> None:
        self.dispatch(event)

    def dispatch(self, event: WorkspaceEvent) -> bool:
        """
        Apply a mutation event. The tree itself is replaced separately with
        `replace_tree()` once the watcher has rescanned.
        """
        with self._lock:
            return self._set_state(dispatcher.dispatch(self._state, event))

    def handle_event(self, data: Any) -> bool:
        """
        Parse and apply an event given as a plain dict, e.g. from a watcher process.
        """
        return self.dispatch(parse_event(data))

    ## Read-only views

    @property
    def history(self) -> HistoryState:
        return self._state.history

    @property
    def history_entries(self) -> Tuple[HistoryEntry, ...]:
        return self._state.history.entries

    @property
    def history_index(self) -> int:
        return self._state.history.index

    @property
    def open_document_path(self) -> Optional[str]:
        return self._state.open_path

    @property
    def current_collection_path(self) -> Optional[str]:
        return self._state.collection.current_collection_path

    @property
    def last_collection_path(self) -> Optional[str]:
        return self._state.collection.last_collection_path

    @property
    def collection_entries(self) -> List[Entry]:
        with self._lock:
            return collection_state.compute_collection_entries(
                self._state.collection.current_collection_path,
                self._entry_index(),
                self.collection_file_suffixes,
            )

    @property
    def selected_entry_paths(self) -> FrozenSet[str]:
        return self._state.selection.selected_paths

    @property
    def selection_anchor_path(self) -> Optional[str]:
        return self._state.selection.anchor_path

    @property
    def expanded_directories(self) -> Tuple[str, ...]:
        return self._state.directories.expanded

    @property
    def pinned_directories(self) -> Tuple[str, ...]:
        return self._state.directories.pinned
