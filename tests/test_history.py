import random

from mdspace.model.history_model import HistoryEntry, HistoryState
from mdspace.workspaces import history


def _state(paths, index):
    return HistoryState(entries=tuple(HistoryEntry(path=p) for p in paths), index=index)


def test_append_to_empty():
    result = history.append(history.EMPTY_HISTORY, HistoryEntry(path="/ws/a.md"), 50)
    assert result.did_change
    assert result.state.paths == ("/ws/a.md",)
    assert result.state.index == 0


def test_append_same_path_is_noop():
    state = _state(["/ws/a.md", "/ws/b.md"], 1)
    result = history.append(state, HistoryEntry(path="/ws/b.md"), 50)
    assert not result.did_change
    assert result.state is state

    once = history.append(state, HistoryEntry(path="/ws/c.md"), 50).state
    twice = history.append(once, HistoryEntry(path="/ws/c.md"), 50).state
    assert twice.entries == once.entries


def test_append_drops_forward_entries():
    state = _state(["/ws/a.md", "/ws/b.md", "/ws/c.md"], 0)
    result = history.append(state, HistoryEntry(path="/ws/d.md"), 50)
    assert result.state.paths == ("/ws/a.md", "/ws/d.md")
    assert result.state.index == 1
    assert result.state.entries[0] is state.entries[0]


def test_append_evicts_oldest():
    state = history.EMPTY_HISTORY
    for i in range(5):
        state = history.append(state, HistoryEntry(path=f"/ws/{i}.md"), 3).state
        assert len(state.entries) <= 3
    assert state.paths == ("/ws/2.md", "/ws/3.md", "/ws/4.md")
    assert state.index == 2


def test_navigate():
    state = _state(["/ws/a.md", "/ws/b.md"], 1)
    target = history.navigate(state, -1)
    assert target is not None
    assert target.index == 0
    assert target.entry.path == "/ws/a.md"
    assert state.index == 1
    assert history.navigate(state, 1) is None
    assert history.navigate(_state(["/ws/a.md"], 0), -1) is None
    assert history.navigate(history.EMPTY_HISTORY, 1) is None


def test_can_go_back_and_forward():
    state = _state(["/ws/a.md", "/ws/b.md", "/ws/c.md"], 1)
    assert history.can_go_back(state)
    assert history.can_go_forward(state)
    assert not history.can_go_back(history.commit_index(state, 0))
    assert not history.can_go_forward(history.commit_index(state, 2))
    assert not history.can_go_back(history.EMPTY_HISTORY)
    assert not history.can_go_forward(history.EMPTY_HISTORY)


def test_commit_index_out_of_range():
    state = _state(["/ws/a.md"], 0)
    assert history.commit_index(state, 3) is state
    assert history.commit_index(state, 0) is state


def test_replace_path_is_exact_and_keeps_identity():
    state = _state(["/ws/folder", "/ws/folder/a.md", "/ws/b.md"], 2)
    entries = history.replace_path(state.entries, "/ws/folder", "/ws/renamed")
    assert [e.path for e in entries] == ["/ws/renamed", "/ws/folder/a.md", "/ws/b.md"]
    assert entries[1] is state.entries[1]
    assert entries[2] is state.entries[2]


def test_replace_path_keeps_selection():
    entries = (HistoryEntry(path="/ws/a.md", selection={"anchor": 4, "head": 9}),)
    renamed = history.replace_path(entries, "/ws/a.md", "/ws/b.md")
    assert renamed[0].path == "/ws/b.md"
    assert renamed[0].selection == {"anchor": 4, "head": 9}


def test_replace_path_prefix_cascades():
    state = _state(["/ws/folder/a.md", "/ws/folder/sub/b.md", "/ws/other/c.md", "/ws/folder2/d.md"], 0)
    entries = history.replace_path_prefix(state.entries, "/ws/folder", "/ws/renamed")
    assert [e.path for e in entries] == [
        "/ws/renamed/a.md",
        "/ws/renamed/sub/b.md",
        "/ws/other/c.md",
        "/ws/folder2/d.md",
    ]
    assert entries[2] is state.entries[2]
    assert entries[3] is state.entries[3]


def test_rewrite_paths_unchanged_returns_same_state():
    state = _state(["/ws/a.md"], 0)
    assert history.rewrite_paths(state, "/ws/missing.md", "/ws/x.md", cascade=False) is state
    assert history.rewrite_paths(state, "/ws/missing", "/ws/x", cascade=True) is state


def test_remove_repeated_path():
    state = _state(["/notes/a.md", "/notes/b.md", "/notes/a.md"], 2)
    result = history.remove_paths(state, ["/notes/a.md"])
    assert result.paths == ("/notes/b.md",)
    assert result.index == 0


def test_remove_only_entry():
    result = history.remove_paths(_state(["/notes/a.md"], 0), ["/notes/a.md"])
    assert result.entries == ()
    assert result.index == -1


def test_remove_missing_path():
    state = _state(["/notes/a.md", "/notes/b.md"], 1)
    assert history.remove_paths(state, ["/notes/missing.md"]) is state
    assert history.remove_paths(state, []) is state


def test_remove_directory_cascades():
    state = _state(["/notes/a.md", "/notes/folder/b.md", "/notes/folder/nested/c.md"], 2)
    result = history.remove_paths(state, ["/notes/folder"])
    assert result.paths == ("/notes/a.md",)
    assert result.index == 0
    assert result.entries[0] is state.entries[0]


def test_remove_spares_sibling_with_shared_prefix():
    state = _state(["/ws/folder/a.md", "/ws/folder2/x.md"], 1)
    result = history.remove_paths(state, ["/ws/folder"])
    assert result.paths == ("/ws/folder2/x.md",)
    assert result.index == 0


def test_remove_mixed_separators():
    state = _state(["C:/notes/a.md", "C:/notes/folder/b.md", "C:/notes/folder/c.md"], 0)
    result = history.remove_paths(state, ["C:\\notes\\folder"])
    assert result.paths == ("C:/notes/a.md",)
    assert result.index == 0


def test_remove_before_current_shifts_index():
    state = _state(["/ws/a.md", "/ws/b.md", "/ws/c.md", "/ws/d.md"], 2)
    result = history.remove_paths(state, ["/ws/a.md"])
    assert result.paths == ("/ws/b.md", "/ws/c.md", "/ws/d.md")
    assert result.current.path == "/ws/c.md"

    result = history.remove_paths(state, ["/ws/d.md"])
    assert result.current.path == "/ws/c.md"


def test_remove_first_current_snaps_forward():
    state = _state(["/ws/a.md", "/ws/b.md"], 0)
    result = history.remove_paths(state, ["/ws/a.md"])
    assert result.paths == ("/ws/b.md",)
    assert result.index == 0


def test_remove_twice():
    state = _state(["/ws/a.md", "/ws/b.md"], 1)
    once = history.remove_paths(state, ["/ws/b.md"])
    assert history.remove_paths(once, ["/ws/b.md"]) is once


def test_commit_selection():
    state = _state(["/ws/a.md", "/ws/b.md"], 1)
    committed = history.commit_selection(state, {"anchor": 1, "head": 2})
    assert committed.current.selection == {"anchor": 1, "head": 2}
    assert committed.entries[0] is state.entries[0]
    assert history.commit_selection(committed, {"anchor": 1, "head": 2}) is committed
    assert history.commit_selection(history.EMPTY_HISTORY, {"anchor": 0}) is history.EMPTY_HISTORY


def test_hydrate():
    state = history.hydrate(["/ws/a.md", "/ws/image.png", "/ws/B.MD"], 50)
    assert state.paths == ("/ws/a.md", "/ws/B.MD")
    assert state.index == 0

    state = history.hydrate(["/ws/a.md", "/ws/b.md"], 50, initial_path="/ws/b.md")
    assert state.index == 1

    state = history.hydrate(["/ws/a.md", "/ws/b.md", "/ws/c.md"], 2, initial_path="/ws/c.md")
    assert state.paths == ("/ws/a.md", "/ws/b.md")
    assert state.index == 0

    assert history.hydrate(["/ws/image.png"], 50) is history.EMPTY_HISTORY
    assert history.hydrate(["/ws/notes.txt"], 50, suffixes=()).paths == ("/ws/notes.txt",)


def test_index_invariant_holds_under_random_operations():
    rng = random.Random(7)
    paths = [f"/ws/{d}/{n}.md" for d in ("a", "b", "c") for n in range(4)]
    state = history.EMPTY_HISTORY
    for _ in range(500):
        op = rng.randrange(5)
        if op < 2:
            state = history.append(state, HistoryEntry(path=rng.choice(paths)), 6).state
        elif op == 2:
            target = history.navigate(state, rng.choice((-1, 1)))
            if target:
                state = history.commit_index(state, target.index)
        elif op == 3:
            state = history.remove_paths(state, [rng.choice(paths + ["/ws/a", "/ws/b"])])
        else:
            state = history.rewrite_paths(state, "/ws/a", "/ws/c", cascade=True)
        assert state.is_consistent()
        assert len(state.entries) <= 6


def test_replace_path_mixed_separators():
    state = _state(["C:/notes/a.md", "C:/notes/a.md/child.md"], 0)
    entries = history.replace_path(state.entries, "C:\\notes\\a.md", "C:\\notes\\b.md")
    assert [e.path for e in entries] == ["C:\\notes\\b.md", "C:/notes/a.md/child.md"]
    assert entries[1] is state.entries[1]
