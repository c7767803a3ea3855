"""
Navigation history: a bounded back/forward stack of opened documents.

All operations are pure. They take a `HistoryState` and return a new one, reusing
every `HistoryEntry` that did not change, so callers can cheaply tell what moved.
"""

from typing import Any, Literal, Optional, Sequence, Tuple

from mdspace.config.logger import get_logger
from mdspace.model.history_model import (
    HistoryAppendResult,
    HistoryEntry,
    HistoryState,
    HistoryTarget,
)
from mdspace.util.format_utils import fmt_count_items, fmt_rewrite
from mdspace.util.path_utils import has_suffix, is_path_in_paths, normalize, replace_prefix

log = get_logger(__name__)

EMPTY_HISTORY = HistoryState()


def append(state: HistoryState, entry: HistoryEntry, max_len: int) -> HistoryAppendResult:
    """
    Record a visit to `entry`. Visiting the document that is already current is a
    no-op. Otherwise any forward entries are dropped (as in browser history), the
    entry becomes current, and the oldest entries are evicted beyond `max_len`.
    """
    current = state.current
    if state.index != -1 and current is not None and current.path == entry.path:
        return HistoryAppendResult(state, False)

    entries = state.entries[: state.index + 1] + (entry,)
    index = len(entries) - 1

    if len(entries) > max_len:
        excess = len(entries) - max_len
        entries = entries[excess:]
        index = max(0, index - excess)
        log.debug("Evicted %s from history", fmt_count_items(excess, "entry"))

    return HistoryAppendResult(HistoryState(entries=entries, index=index), True)


def navigate(state: HistoryState, delta: Literal[-1, 1]) -> Optional[HistoryTarget]:
    """
    Find the entry `delta` steps from the current one, or None if there is none.
    This doesn't move the index: the caller commits `target.index` only once the
    target document has actually been opened.
    """
    next_index = state.index + delta
    if next_index < 0 or next_index >= len(state.entries):
        return None
    return HistoryTarget(next_index, state.entries[next_index])


def can_go_back(state: HistoryState) -> bool:
    return state.index > 0


def can_go_forward(state: HistoryState) -> bool:
    return state.index < len(state.entries) - 1


def commit_index(state: HistoryState, index: int) -> HistoryState:
    if index == state.index or not 0 <= index < len(state.entries):
        return state
    return state.model_copy(update={"index": index})


def replace_path(
    entries: Tuple[HistoryEntry, ...], old_path: str, new_path: str
) -> Tuple[HistoryEntry, ...]:
    """
    Rewrite entries whose path is `old_path` (a single renamed file), in either
    separator style. Descendants are not touched. Entries that don't match are
    returned as the same objects.
    """
    norm_old = normalize(old_path)
    if norm_old == normalize(new_path):
        return entries
    return tuple(
        entry.model_copy(update={"path": new_path}) if normalize(entry.path) == norm_old else entry
        for entry in entries
    )


def replace_path_prefix(
    entries: Tuple[HistoryEntry, ...], old_path: str, new_path: str
) -> Tuple[HistoryEntry, ...]:
    """
    Rewrite entries at or below `old_path` (a renamed or moved directory), keeping
    the rest of each path. Entries that don't match are returned as the same objects.
    """
    if old_path == new_path:
        return entries
    result = []
    for entry in entries:
        rewritten = replace_prefix(entry.path, old_path, new_path)
        result.append(entry if rewritten == entry.path else entry.model_copy(update={"path": rewritten}))
    return tuple(result)


def rewrite_paths(
    state: HistoryState, old_path: str, new_path: str, cascade: bool
) -> HistoryState:
    rewrite = replace_path_prefix if cascade else replace_path
    entries = rewrite(state.entries, old_path, new_path)
    if all(a is b for a, b in zip(entries, state.entries)):
        return state
    log.debug("Rewrote history paths: %s", fmt_rewrite(old_path, new_path))
    return state.model_copy(update={"entries": entries})


def remove_paths(state: HistoryState, paths_to_remove: Sequence[str]) -> HistoryState:
    """
    Drop every entry at or below any of the given paths, so deleting a directory
    drops history for everything in it. The index moves left by the number of
    removed entries at or before it. If that leaves it before the start (the
    current entry and everything before it were removed), the first remaining
    entry becomes current.
    """
    if not paths_to_remove or not state.entries:
        return state

    kept = []
    removed_before = 0
    for position, entry in enumerate(state.entries):
        if is_path_in_paths(entry.path, paths_to_remove):
            if position <= state.index:
                removed_before += 1
        else:
            kept.append(entry)

    if len(kept) == len(state.entries):
        return state

    log.debug(
        "Removed %s from history",
        fmt_count_items(len(state.entries) - len(kept), "entry"),
    )
    if not kept:
        return EMPTY_HISTORY
    index = min(max(0, state.index - removed_before), len(kept) - 1)
    return HistoryState(entries=tuple(kept), index=index)


def commit_selection(state: HistoryState, selection: Any) -> HistoryState:
    """
    Store the editor's selection on the current entry, so it can be restored when
    navigating back to it.
    """
    current = state.current
    if current is None or current.selection == selection:
        return state
    entries = list(state.entries)
    entries[state.index] = current.model_copy(update={"selection": selection})
    return state.model_copy(update={"entries": tuple(entries)})


def hydrate(
    paths: Sequence[str],
    max_len: int,
    suffixes: Sequence[str] = (".md",),
    initial_path: Optional[str] = None,
) -> HistoryState:
    """
    Build a fresh history from a list of opened files, such as those passed on the
    command line. Files without a matching suffix are skipped.
    """
    valid_paths = [path for path in paths if has_suffix(path, suffixes)][:max_len]
    if not valid_paths:
        return EMPTY_HISTORY
    target = initial_path if initial_path in valid_paths else valid_paths[0]
    return HistoryState(
        entries=tuple(HistoryEntry(path=path) for path in valid_paths),
        index=valid_paths.index(target),
    )
