from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from mdspace.model.entries_model import Entry
from mdspace.util.path_utils import normalize

EntryIndex = Mapping[str, Entry]
"""
Flat lookup from path to entry. Every entry appears under its own path and, when
different, under its normalized path too.
"""


def build_index(roots: Iterable[Entry]) -> Dict[str, Entry]:
    """
    Depth-first traversal of the tree, indexing files and directories. Rebuild on
    every new tree snapshot; this is never patched incrementally.
    """
    index: Dict[str, Entry] = {}
    stack: List[Entry] = list(reversed(list(roots)))
    while stack:
        entry = stack.pop()
        index.setdefault(entry.path, entry)
        norm_path = normalize(entry.path)
        if norm_path != entry.path:
            index.setdefault(norm_path, entry)
        if entry.children:
            stack.extend(reversed(entry.children))
    return index


def find_entry(index: EntryIndex, path: Optional[str]) -> Optional[Entry]:
    """
    Look up an entry by path in either separator style.
    """
    if not path:
        return None
    entry = index.get(path)
    if entry is None:
        entry = index.get(normalize(path))
    return entry


def collect_directory_paths(roots: Iterable[Entry], accumulator: Optional[Set[str]] = None) -> Set[str]:
    if accumulator is None:
        accumulator = set()
    for entry in roots:
        if not entry.is_directory:
            continue
        accumulator.add(entry.path)
        if entry.children:
            collect_directory_paths(entry.children, accumulator)
    return accumulator


def _is_untitled_note(name: str) -> bool:
    return name.endswith(".md") and name.startswith("Untitled")


def _sort_key(entry: Entry):
    return (
        not entry.is_directory,
        entry.is_directory or not _is_untitled_note(entry.name),
        entry.name.casefold(),
        entry.name,
    )


def sort_entries(entries: Sequence[Entry], recursive: bool = True) -> List[Entry]:
    """
    Sort for display: directories first, then "Untitled" notes, then by name.
    Entries whose children are already in order are reused as-is.
    """
    result = []
    for entry in entries:
        if recursive and entry.children:
            children = tuple(sort_entries(entry.children, recursive=True))
            if any(a is not b for a, b in zip(children, entry.children)):
                entry = entry.model_copy(update={"children": children})
        result.append(entry)
    return sorted(result, key=_sort_key)


## Tests


def _sample_tree() -> List[Entry]:
    return [
        Entry.directory(
            "/ws/folder",
            [
                Entry.file("/ws/folder/a.md"),
                Entry.directory("/ws/folder/nested", [Entry.file("/ws/folder/nested/c.md")]),
            ],
        ),
        Entry.file("/ws/b.md"),
    ]


def test_build_index():
    index = build_index(_sample_tree())
    assert set(index) == {
        "/ws/folder",
        "/ws/folder/a.md",
        "/ws/folder/nested",
        "/ws/folder/nested/c.md",
        "/ws/b.md",
    }
    assert index["/ws/folder/nested/c.md"].name == "c.md"


def test_build_index_mixed_separators():
    roots = [Entry.directory("C:\\notes", [Entry.file("C:\\notes\\a.md")])]
    index = build_index(roots)
    assert index["C:\\notes\\a.md"] is index["C:/notes/a.md"]
    assert find_entry(index, "C:/notes") is roots[0]
    assert find_entry(index, "C:\\notes\\a.md") is not None
    assert find_entry(index, "C:/missing.md") is None
    assert find_entry(index, None) is None


def test_collect_directory_paths():
    assert collect_directory_paths(_sample_tree()) == {"/ws/folder", "/ws/folder/nested"}


def test_sort_entries():
    entries = [
        Entry.file("/ws/zeta.md"),
        Entry.file("/ws/Untitled 2.md"),
        Entry.directory("/ws/beta"),
        Entry.file("/ws/alpha.md"),
        Entry.directory("/ws/Alpha"),
    ]
    assert [e.name for e in sort_entries(entries)] == [
        "Alpha",
        "beta",
        "Untitled 2.md",
        "alpha.md",
        "zeta.md",
    ]

    sorted_entry = Entry.directory("/ws/a", [Entry.file("/ws/a/x.md")])
    assert sort_entries([sorted_entry])[0] is sorted_entry
