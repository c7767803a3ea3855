"""
Expanded and pinned directory lists. Both follow the same rules as history when
directories are renamed, moved, or deleted. Pinned paths are also kept normalized
and unique, since they are shared across platforms in workspace settings.
"""

from typing import Iterable, Optional, Sequence, Tuple

from mdspace.model.collection_model import DirectorySets
from mdspace.model.entries_model import Entry
from mdspace.util.path_utils import is_equal_or_descendant, is_path_in_paths, normalize, replace_prefix
from mdspace.workspaces.entry_index import collect_directory_paths

EMPTY_DIRECTORY_SETS = DirectorySets()


## Expanded directories


def add_expanded(expanded: Tuple[str, ...], paths: Iterable[str]) -> Tuple[str, ...]:
    """
    Add paths that aren't already expanded, keeping order.
    """
    result = list(expanded)
    for path in paths:
        if path not in result:
            result.append(path)
    return expanded if len(result) == len(expanded) else tuple(result)


def toggle_expanded(expanded: Tuple[str, ...], path: str) -> Tuple[str, ...]:
    if path in expanded:
        return tuple(p for p in expanded if p != path)
    return expanded + (path,)


def remove_expanded(expanded: Tuple[str, ...], removed_paths: Sequence[str]) -> Tuple[str, ...]:
    """
    Drop expanded paths that were deleted, directly or through an ancestor.
    """
    result = tuple(p for p in expanded if not is_path_in_paths(p, removed_paths))
    return expanded if len(result) == len(expanded) else result


def rename_expanded(expanded: Tuple[str, ...], old_path: str, new_path: str) -> Tuple[str, ...]:
    if old_path == new_path:
        return expanded
    result = tuple(replace_prefix(p, old_path, new_path) for p in expanded)
    return expanded if result == expanded else result


def sync_expanded_with_entries(expanded: Tuple[str, ...], roots: Iterable[Entry]) -> Tuple[str, ...]:
    """
    Drop expanded flags for directories that no longer exist in a refreshed tree.
    Duplicates are dropped too.
    """
    valid = collect_directory_paths(roots)
    result = tuple(dict.fromkeys(p for p in expanded if p in valid))
    return expanded if result == expanded else result


## Pinned directories


def normalize_pins(paths: Iterable[object]) -> Tuple[str, ...]:
    """
    Normalize and de-duplicate pinned paths, ignoring blanks and non-strings (pins
    are read from user-editable settings).
    """
    result = {}
    for path in paths:
        if not isinstance(path, str):
            continue
        normalized = normalize(path.strip())
        if normalized:
            result[normalized] = True
    return tuple(result)


def pin(pinned: Tuple[str, ...], path: str) -> Tuple[str, ...]:
    result = normalize_pins(pinned + (path,))
    return pinned if result == pinned else result


def unpin(pinned: Tuple[str, ...], path: str) -> Tuple[str, ...]:
    target = normalize(path)
    result = tuple(p for p in pinned if normalize(p) != target)
    return pinned if len(result) == len(pinned) else result


def filter_pins_for_workspace(pinned: Tuple[str, ...], workspace_path: Optional[str]) -> Tuple[str, ...]:
    if not workspace_path:
        return ()
    return normalize_pins(p for p in pinned if is_equal_or_descendant(p, workspace_path))


def remove_pins(pinned: Tuple[str, ...], removed_paths: Sequence[str]) -> Tuple[str, ...]:
    if not removed_paths:
        return pinned
    result = normalize_pins(p for p in pinned if not is_path_in_paths(p, removed_paths))
    return pinned if result == pinned else result


def rename_pins(pinned: Tuple[str, ...], old_path: str, new_path: str) -> Tuple[str, ...]:
    old_norm = normalize(old_path)
    new_norm = normalize(new_path)
    if old_norm == new_norm:
        return pinned
    result = normalize_pins(replace_prefix(normalize(p), old_norm, new_norm) for p in pinned)
    return pinned if result == pinned else result


def filter_pins_with_entries(
    pinned: Tuple[str, ...], roots: Iterable[Entry], workspace_path: Optional[str] = None
) -> Tuple[str, ...]:
    """
    Keep only pins that are still directories in the tree (or the workspace root).
    """
    if not pinned:
        return pinned
    valid = {normalize(p) for p in collect_directory_paths(roots)}
    if workspace_path:
        valid.add(normalize(workspace_path))
    result = normalize_pins(p for p in pinned if normalize(p) in valid)
    return pinned if result == pinned else result


## Combined


def on_directory_removed(sets: DirectorySets, removed_paths: Sequence[str]) -> DirectorySets:
    expanded = remove_expanded(sets.expanded, removed_paths)
    pinned = remove_pins(sets.pinned, removed_paths)
    return _updated(sets, expanded, pinned)


def on_directory_renamed(sets: DirectorySets, old_path: str, new_path: str) -> DirectorySets:
    expanded = rename_expanded(sets.expanded, old_path, new_path)
    pinned = rename_pins(sets.pinned, old_path, new_path)
    return _updated(sets, expanded, pinned)


def sync_with_entries(
    sets: DirectorySets, roots: Sequence[Entry], workspace_path: Optional[str]
) -> DirectorySets:
    expanded = sync_expanded_with_entries(sets.expanded, roots)
    pinned = filter_pins_with_entries(sets.pinned, roots, workspace_path)
    return _updated(sets, expanded, pinned)


def _updated(sets: DirectorySets, expanded: Tuple[str, ...], pinned: Tuple[str, ...]) -> DirectorySets:
    if expanded is sets.expanded and pinned is sets.pinned:
        return sets
    return DirectorySets(expanded=expanded, pinned=pinned)


## Tests


def test_expanded_rename_and_remove():
    expanded = ("/ws/folder", "/ws/folder/sub", "/ws/folder2", "/ws/other")
    assert rename_expanded(expanded, "/ws/folder", "/ws/renamed") == (
        "/ws/renamed",
        "/ws/renamed/sub",
        "/ws/folder2",
        "/ws/other",
    )
    assert remove_expanded(expanded, ["/ws/folder"]) == ("/ws/folder2", "/ws/other")
    assert remove_expanded(expanded, ["/ws/missing"]) is expanded
    assert rename_expanded(expanded, "/ws/missing", "/ws/x") is expanded


def test_expanded_add_toggle_sync():
    expanded = ("/ws/a",)
    assert add_expanded(expanded, ["/ws/a"]) is expanded
    assert add_expanded(expanded, ["/ws/b", "/ws/a"]) == ("/ws/a", "/ws/b")
    assert toggle_expanded(expanded, "/ws/a") == ()
    assert toggle_expanded(expanded, "/ws/b") == ("/ws/a", "/ws/b")

    roots = [Entry.directory("/ws/a", [Entry.directory("/ws/a/b")])]
    assert sync_expanded_with_entries(("/ws/a", "/ws/gone", "/ws/a/b"), roots) == ("/ws/a", "/ws/a/b")


def test_pins():
    assert normalize_pins(["C:\\notes\\a", " C:/notes/a/ ", "", None, 3]) == ("C:/notes/a",)
    pinned = ("/ws/folder", "/ws/folder/sub", "/ws/other")
    assert remove_pins(pinned, ["/ws/folder"]) == ("/ws/other",)
    assert rename_pins(pinned, "/ws/folder", "/ws/renamed") == (
        "/ws/renamed",
        "/ws/renamed/sub",
        "/ws/other",
    )
    assert rename_pins(pinned, "/ws/nothing", "/ws/else") is pinned
    assert pin(pinned, "/ws/other/") is pinned
    assert unpin(pinned, "/ws/other") == ("/ws/folder", "/ws/folder/sub")
    assert filter_pins_for_workspace(("/ws/a", "/elsewhere/b"), "/ws") == ("/ws/a",)
    assert filter_pins_for_workspace(("/ws/a",), None) == ()

    roots = [Entry.directory("/ws/folder")]
    assert filter_pins_with_entries(pinned + ("/ws",), roots, "/ws") == ("/ws/folder", "/ws")
