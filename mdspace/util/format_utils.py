import shlex
from pathlib import Path
from textwrap import indent
from typing import Any, Iterable

from inflect import engine

_inflect = engine()


def fmt_lines(values: Iterable[Any], prefix: str = "    ", line_break: str = "\n") -> str:
    """
    Simple indented or prefixed formatting of values one per line.
    """
    return indent(line_break.join(str(value) for value in values), prefix).rstrip()


def fmt_path(path: str | Path) -> str:
    """
    Format a path or filename for display. This quotes it if it contains whitespace.
    Workspace paths are displayed exactly as given, since they may come from another
    platform.
    """
    path_str = str(path)
    if not path_str:
        return "''"
    return shlex.quote(path_str) if any(c.isspace() for c in path_str) else path_str


def fmt_rewrite(old: str | Path, new: str | Path) -> str:
    return f"{fmt_path(old)} -> {fmt_path(new)}"


def fmt_count_items(count: int, name: str = "item") -> str:
    """
    Format a count and a name as a pluralized phrase, e.g. "1 item" or "2 items".
    """
    return f"{count} {_inflect.plural(name, count)}"  # type: ignore


## Tests


def test_fmt_lines():
    assert fmt_lines(["a", "b"]) == "    a\n    b"
    assert fmt_lines([]) == ""


def test_fmt_path():
    assert fmt_path("/ws/notes/a.md") == "/ws/notes/a.md"
    assert fmt_path("/ws/my notes/a.md") == "'/ws/my notes/a.md'"
    assert fmt_path("C:\\notes\\a.md") == "C:\\notes\\a.md"
    assert fmt_rewrite("/ws/a", "/ws/b") == "/ws/a -> /ws/b"


def test_fmt_count_items():
    assert fmt_count_items(1, "entry") == "1 entry"
    assert fmt_count_items(3, "entry") == "3 entries"
    assert fmt_count_items(0, "path") == "0 paths"
