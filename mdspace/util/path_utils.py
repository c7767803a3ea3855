"""
Path algebra for workspace paths. Paths are plain strings that may use either `/`
or `\\` as a separator (a workspace may be authored on Windows and read on POSIX
or vice versa), so all comparisons go through `normalize()`.

These functions are total: malformed input like an empty string never raises and
simply fails to match anything.
"""

import re
from typing import Iterable, Optional, Sequence

_separator_re = re.compile(r"[/\\]")
_multiple_slashes_re = re.compile(r"/{2,}")

SEPARATORS = ("/", "\\")


def normalize(path: str) -> str:
    """
    Convert backslashes to forward slashes, collapse repeated slashes, and drop
    any trailing slash (except for the root `/`). Case and `.`/`..` segments are
    left alone.

    normalize("C:\\notes\\folder") -> "C:/notes/folder"
    normalize("/home//user/") -> "/home/user"
    """
    if not path:
        return ""
    collapsed = _multiple_slashes_re.sub("/", path.replace("\\", "/"))
    if len(collapsed) > 1 and collapsed.endswith("/"):
        collapsed = collapsed[:-1]
    return collapsed


def is_equal_or_descendant(candidate: str, ancestor: str) -> bool:
    """
    True if `candidate` is `ancestor` itself or nested anywhere below it. The
    prefix check is separator-qualified, so `/ws/folder2` is not under `/ws/folder`.
    """
    norm_candidate = normalize(candidate)
    norm_ancestor = normalize(ancestor)
    if not norm_candidate or not norm_ancestor:
        return False
    if norm_candidate == norm_ancestor:
        return True
    prefix = norm_ancestor if norm_ancestor.endswith("/") else norm_ancestor + "/"
    return norm_candidate.startswith(prefix)


def is_path_in_paths(path: str, targets: Iterable[str]) -> bool:
    """
    True if `path` is equal to or a descendant of any of the target paths.
    """
    return any(is_equal_or_descendant(path, target) for target in targets)


def replace_prefix(path: str, old_prefix: str, new_prefix: str) -> str:
    """
    Move `path` from under `old_prefix` to under `new_prefix`, preserving the rest
    of the path. Paths not under `old_prefix` are returned unchanged.

    replace_prefix("/ws/folder/sub/b.md", "/ws/folder", "/ws/renamed") -> "/ws/renamed/sub/b.md"
    """
    if not is_equal_or_descendant(path, old_prefix):
        return path
    if path == old_prefix:
        return new_prefix
    if path.startswith(old_prefix) and path[len(old_prefix)] in SEPARATORS:
        return new_prefix + path[len(old_prefix) :]

    # Separator styles differ, so take the suffix from the normalized form.
    norm_path = normalize(path)
    norm_old = normalize(old_prefix).rstrip("/")
    return new_prefix + norm_path[len(norm_old) :]


def file_name(path: str) -> str:
    """
    The last segment of a path, with either separator.

    file_name("C:\\Users\\file.txt") -> "file.txt"
    """
    segments = [segment for segment in _separator_re.split(path) if segment]
    return segments[-1] if segments else path


def file_stem(path: str) -> str:
    """
    The file name without its extension. Hidden files like `.env` keep their name.
    """
    name = file_name(path)
    dot = name.rfind(".")
    return name[:dot] if dot > 0 else name


def parent_path(path: str) -> Optional[str]:
    """
    The path with its last segment removed, in the path's own separator style, or
    None if there is no parent.
    """
    trimmed = path.rstrip("/\\")
    cut = max(trimmed.rfind("/"), trimmed.rfind("\\"))
    if cut < 0:
        return None
    if cut == 0:
        return trimmed[0]
    return trimmed[:cut]


def has_suffix(name: str, suffixes: Sequence[str]) -> bool:
    """
    Case-insensitive suffix check. An empty suffix list matches everything.
    """
    if not suffixes:
        return True
    lower = name.lower()
    return any(lower.endswith(suffix.lower()) for suffix in suffixes)


## Tests


def test_normalize():
    assert normalize("C:\\Users\\Documents") == "C:/Users/Documents"
    assert normalize("/home//user//file") == "/home/user/file"
    assert normalize("/ws/folder/") == "/ws/folder"
    assert normalize("/") == "/"
    assert normalize("") == ""
    assert normalize("/WS/Folder/../a.md") == "/WS/Folder/../a.md"


def test_is_equal_or_descendant():
    assert is_equal_or_descendant("/ws/folder", "/ws/folder")
    assert is_equal_or_descendant("/ws/folder/sub/b.md", "/ws/folder")
    assert not is_equal_or_descendant("/ws/folder2/x.md", "/ws/folder")
    assert not is_equal_or_descendant("/ws", "/ws/folder")
    assert is_equal_or_descendant("C:/notes/folder/b.md", "C:\\notes\\folder")
    assert is_equal_or_descendant("C:\\notes\\folder\\b.md", "C:/notes/folder/")
    assert is_equal_or_descendant("/ws/a.md", "/")

    # Empty strings never match.
    assert not is_equal_or_descendant("", "")
    assert not is_equal_or_descendant("/ws/a.md", "")
    assert not is_equal_or_descendant("", "/ws")


def test_is_path_in_paths():
    assert is_path_in_paths("/ws/a/b.md", ["/other", "/ws/a"])
    assert not is_path_in_paths("/ws/a/b.md", [])
    assert not is_path_in_paths("/ws/ab.md", ["/ws/a"])


def test_replace_prefix():
    assert replace_prefix("/ws/folder/sub/b.md", "/ws/folder", "/ws/renamed") == "/ws/renamed/sub/b.md"
    assert replace_prefix("/ws/folder", "/ws/folder", "/ws/renamed") == "/ws/renamed"
    assert replace_prefix("/ws/other/c.md", "/ws/folder", "/ws/renamed") == "/ws/other/c.md"
    assert replace_prefix("/ws/folder2/c.md", "/ws/folder", "/ws/renamed") == "/ws/folder2/c.md"
    assert replace_prefix("C:\\notes\\old\\a.md", "C:\\notes\\old", "C:\\notes\\new") == (
        "C:\\notes\\new\\a.md"
    )
    assert replace_prefix("C:/notes/old/a.md", "C:\\notes\\old", "C:\\notes\\new") == (
        "C:\\notes\\new/a.md"
    )
    assert replace_prefix("", "/ws", "/new") == ""


def test_name_helpers():
    assert file_name("C:\\Users\\file.txt") == "file.txt"
    assert file_name("/home/user/docs/") == "docs"
    assert file_stem("/home/user/archive.tar.gz") == "archive.tar"
    assert file_stem("/home/user/.env") == ".env"
    assert parent_path("/ws/folder/a.md") == "/ws/folder"
    assert parent_path("C:\\notes\\a.md") == "C:\\notes"
    assert parent_path("/ws") == "/"
    assert parent_path("a.md") is None
    assert has_suffix("README.MD", [".md"])
    assert not has_suffix("image.png", [".md"])
    assert has_suffix("image.png", [])
