"""
Keeps a markdown workspace's navigation history, collection view, selection, and
expanded and pinned directories consistent as files are created, deleted,
renamed, and moved.
"""

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
from mdspace.workspaces.workspace_session import WorkspaceSession

__all__ = [
    "Entry",
    "EntriesDeleted",
    "EntryCreated",
    "EntryMoved",
    "EntryRenamed",
    "HistoryEntry",
    "HistoryState",
    "WorkspaceEvent",
    "WorkspaceSession",
    "WorkspaceState",
    "parse_event",
]
