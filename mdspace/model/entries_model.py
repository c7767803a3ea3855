from datetime import datetime
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from mdspace.util.path_utils import file_name


SNAPSHOT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)
"""
Config shared by all state snapshots: immutable, and parseable from either
snake_case or the camelCase keys used by the desktop app.
"""


class Entry(BaseModel):
    """
    A file or directory in a workspace tree snapshot. Only directories have
    children; missing or empty children means the directory is unexpanded or empty.
    Trees are replaced wholesale on each rescan, never edited in place.
    """

    model_config = SNAPSHOT_CONFIG

    path: str
    name: str
    is_directory: bool = False
    children: Optional[Tuple["Entry", ...]] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    @classmethod
    def file(cls, path: str, name: Optional[str] = None, **kwargs) -> "Entry":
        return cls(path=path, name=name or file_name(path), is_directory=False, **kwargs)

    @classmethod
    def directory(
        cls, path: str, children: Iterable["Entry"] = (), name: Optional[str] = None, **kwargs
    ) -> "Entry":
        return cls(
            path=path,
            name=name or file_name(path),
            is_directory=True,
            children=tuple(children),
            **kwargs,
        )

    def __str__(self) -> str:
        return f"{self.path}/" if self.is_directory else self.path
