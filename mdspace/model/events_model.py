from typing import Annotated, Any, Literal, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from mdspace.errors import InvalidInput
from mdspace.model.entries_model import Entry, SNAPSHOT_CONFIG


class EntryCreated(BaseModel):
    """A file or directory was created under `parent_path`."""

    model_config = SNAPSHOT_CONFIG

    kind: Literal["created"] = "created"
    parent_path: str
    entry: Entry


class EntriesDeleted(BaseModel):
    """One or more entries (and everything below them) were deleted."""

    model_config = SNAPSHOT_CONFIG

    kind: Literal["deleted"] = "deleted"
    paths: Tuple[str, ...]


class EntryRenamed(BaseModel):
    """An entry was renamed in place."""

    model_config = SNAPSHOT_CONFIG

    kind: Literal["renamed"] = "renamed"
    old_path: str
    new_path: str
    is_directory: bool
    new_name: str


class EntryMoved(BaseModel):
    """An entry was moved into `destination_dir_path`, ending up at `new_path`."""

    model_config = SNAPSHOT_CONFIG

    kind: Literal["moved"] = "moved"
    source_path: str
    destination_dir_path: str
    new_path: str
    is_directory: bool


WorkspaceEvent = Annotated[
    Union[EntryCreated, EntriesDeleted, EntryRenamed, EntryMoved],
    Field(discriminator="kind"),
]
"""
A single filesystem mutation, as delivered by the watcher.
"""

_event_adapter: TypeAdapter = TypeAdapter(WorkspaceEvent)


def parse_event(data: Any) -> WorkspaceEvent:
    """
    Parse a watcher payload (a dict with a `kind` key, using snake_case or
    camelCase field names) into a typed event.
    """
    try:
        return _event_adapter.validate_python(data)
    except ValidationError as e:
        raise InvalidInput(f"Invalid workspace event: {data!r}: {e}") from e


## Tests


def test_parse_event():
    event = parse_event(
        {
            "kind": "renamed",
            "oldPath": "/ws/old",
            "newPath": "/ws/new",
            "isDirectory": True,
            "newName": "new",
        }
    )
    assert isinstance(event, EntryRenamed)
    assert event.old_path == "/ws/old"

    event = parse_event(
        {
            "kind": "created",
            "parent_path": "/ws",
            "entry": {"path": "/ws/folder", "name": "folder", "isDirectory": True},
        }
    )
    assert isinstance(event, EntryCreated)
    assert event.entry.is_directory

    event = parse_event({"kind": "deleted", "paths": ["/ws/a.md"]})
    assert isinstance(event, EntriesDeleted)
    assert event.paths == ("/ws/a.md",)


def test_parse_event_invalid():
    import pytest

    with pytest.raises(InvalidInput):
        parse_event({"kind": "exploded", "paths": []})
    with pytest.raises(InvalidInput):
        parse_event({"kind": "moved", "sourcePath": "/ws/a"})
