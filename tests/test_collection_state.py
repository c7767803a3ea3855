from mdspace.model.collection_model import CollectionViewState
from mdspace.model.entries_model import Entry
from mdspace.model.events_model import EntriesDeleted, EntryCreated, EntryMoved, EntryRenamed
from mdspace.workspaces import collection_state
from mdspace.workspaces.entry_index import build_index


def _view(current, last=None):
    return CollectionViewState(current_collection_path=current, last_collection_path=last)


def _tree():
    return [
        Entry.directory(
            "/ws/folder",
            [
                Entry.file("/ws/folder/a.md"),
                Entry.file("/ws/folder/B.MD"),
                Entry.file("/ws/folder/image.png"),
                Entry.directory("/ws/folder/nested", [Entry.file("/ws/folder/nested/c.md")]),
            ],
        ),
        Entry.file("/ws/top.md"),
    ]


def test_compute_collection_entries():
    index = build_index(_tree())
    names = [e.name for e in collection_state.compute_collection_entries("/ws/folder", index)]
    assert names == ["a.md", "B.MD"]

    names = [e.name for e in collection_state.compute_collection_entries("/ws/folder", index, ())]
    assert names == ["a.md", "B.MD", "image.png"]


def test_compute_collection_entries_empty_cases():
    index = build_index(_tree())
    assert collection_state.compute_collection_entries(None, index) == []
    assert collection_state.compute_collection_entries("", index) == []
    assert collection_state.compute_collection_entries("/ws/missing", index) == []
    assert collection_state.compute_collection_entries("/ws/top.md", index) == []
    unexpanded = build_index([Entry(path="/ws/closed", name="closed", is_directory=True)])
    assert collection_state.compute_collection_entries("/ws/closed", unexpanded) == []


def test_compute_collection_entries_mixed_separators():
    index = build_index([Entry.directory("C:\\notes", [Entry.file("C:\\notes\\a.md")])])
    entries = collection_state.compute_collection_entries("C:/notes", index)
    assert [e.name for e in entries] == ["a.md"]


def test_directory_created_becomes_collection():
    state = _view(None)
    created = EntryCreated(parent_path="/ws", entry=Entry.directory("/ws/folder"))
    state = collection_state.on_entry_created(state, created)
    assert state == _view("/ws/folder", "/ws/folder")

    file_created = EntryCreated(parent_path="/ws/folder", entry=Entry.file("/ws/folder/new.md"))
    assert collection_state.on_entry_created(state, file_created) is state


def test_deleted_clears_independently():
    state = _view("/ws/folder/nested", "/ws/other")
    state = collection_state.on_entries_deleted(state, EntriesDeleted(paths=("/ws/folder",)))
    assert state == _view(None, "/ws/other")

    state = _view("/ws/folder2", "/ws/folder2")
    assert collection_state.on_entries_deleted(state, EntriesDeleted(paths=("/ws/folder",))) is state


def test_renamed_rewrites_prefix():
    state = _view("/ws/folder/sub", "/ws/folder")
    event = EntryRenamed(old_path="/ws/folder", new_path="/ws/renamed", is_directory=True, new_name="renamed")
    assert collection_state.on_entry_renamed(state, event) == _view("/ws/renamed/sub", "/ws/renamed")

    untouched = _view("/ws/other", None)
    assert collection_state.on_entry_renamed(untouched, event) is untouched


def test_moved_rewrites_prefix():
    state = _view("/ws/src/child")
    event = EntryMoved(
        source_path="/ws/src", destination_dir_path="/ws", new_path="/ws/dest", is_directory=True
    )
    assert collection_state.on_entry_moved(state, event).current_collection_path == "/ws/dest/child"


def test_open_and_toggle():
    state = collection_state.open_collection(collection_state.CLOSED_COLLECTION, "/ws/folder")
    assert state == _view("/ws/folder", "/ws/folder")

    closed = collection_state.toggle_collection_view(state)
    assert closed == _view(None, "/ws/folder")
    assert collection_state.toggle_collection_view(closed) == state

    assert collection_state.open_collection(state, None) == _view(None, "/ws/folder")
    assert collection_state.toggle_collection_view(collection_state.CLOSED_COLLECTION) is (
        collection_state.CLOSED_COLLECTION
    )


def test_reset_and_clear_last():
    state = _view("/ws/a", "/ws/a")
    assert collection_state.clear_last_collection_path(state) == _view("/ws/a", None)
    assert collection_state.reset_collection(state) == collection_state.CLOSED_COLLECTION
