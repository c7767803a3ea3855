"""
Explorer multi-selection: selecting, range extension, and keeping the selection
valid as entries are deleted, renamed, or moved away.
"""

from typing import Iterable, Optional, Sequence

from mdspace.model.collection_model import EntrySelection
from mdspace.util.path_utils import is_path_in_paths

EMPTY_SELECTION = EntrySelection()


def select_only(path: str) -> EntrySelection:
    return EntrySelection(selected_paths=frozenset([path]), anchor_path=path)


def set_selection(paths: Iterable[str], anchor_path: Optional[str] = None) -> EntrySelection:
    return EntrySelection(selected_paths=frozenset(paths), anchor_path=anchor_path)


def toggle_path(selection: EntrySelection, path: str) -> EntrySelection:
    """
    Add or remove one path (ctrl/cmd-click). The anchor moves to a newly added
    path, and is cleared if its own path is removed.
    """
    if path in selection.selected_paths:
        anchor = None if selection.anchor_path == path else selection.anchor_path
        return EntrySelection(selected_paths=selection.selected_paths - {path}, anchor_path=anchor)
    return EntrySelection(selected_paths=selection.selected_paths | {path}, anchor_path=path)


def extend_to(selection: EntrySelection, path: str, visible_order: Sequence[str]) -> EntrySelection:
    """
    Shift-click: select every visible path between the anchor and `path`,
    inclusive, keeping the anchor. With no usable anchor this selects just `path`.
    """
    anchor = selection.anchor_path
    if anchor is None or anchor not in visible_order or path not in visible_order:
        return select_only(path)
    start = visible_order.index(anchor)
    end = visible_order.index(path)
    if start > end:
        start, end = end, start
    return EntrySelection(
        selected_paths=frozenset(visible_order[start : end + 1]),
        anchor_path=anchor,
    )


def purge_paths(selection: EntrySelection, removed_paths: Sequence[str]) -> EntrySelection:
    """
    Drop selected paths at or below any deleted or renamed-away path, and clear
    the anchor if it was dropped.
    """
    kept = frozenset(p for p in selection.selected_paths if not is_path_in_paths(p, removed_paths))
    anchor = selection.anchor_path
    if anchor is not None and is_path_in_paths(anchor, removed_paths):
        anchor = None
    if kept == selection.selected_paths and anchor == selection.anchor_path:
        return selection
    return EntrySelection(selected_paths=kept, anchor_path=anchor)

