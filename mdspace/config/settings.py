import threading
from contextlib import contextmanager
from enum import Enum
from logging import DEBUG, ERROR, INFO, WARNING
from typing import Tuple

from pydantic.dataclasses import dataclass

from mdspace.errors import InvalidState


APP_NAME = "mdspace"

DOT_DIR = ".mdspace"

MAX_HISTORY_LENGTH = 50

MARKDOWN_SUFFIXES = (".md",)


class LogLevel(Enum):
    debug = DEBUG
    info = INFO
    warning = WARNING
    message = WARNING  # Same as warning, just for important console messages.
    error = ERROR

    @classmethod
    def parse(cls, level_str: str):
        canon_name = level_str.strip().lower()
        if canon_name == "warn":
            canon_name = "warning"
        try:
            return cls[canon_name]
        except KeyError:
            raise ValueError(
                f"Invalid log level: `{level_str}`. Valid options are: {', '.join(f'`{name}`' for name in cls.__members__)}"
            )

    def __str__(self):
        return self.name


@dataclass
class Settings:
    max_history_length: int
    """Maximum number of entries kept in navigation history."""

    collection_file_suffixes: Tuple[str, ...]
    """File suffixes listed in a collection view. Empty means list every file."""

    console_log_level: LogLevel
    """The log level for console-based logging."""

    file_log_level: LogLevel
    """The log level for file-based logging."""

    log_to_file: bool
    """If true, also log to a file under the log root."""


# Initial default settings.
_settings = Settings(
    max_history_length=MAX_HISTORY_LENGTH,
    collection_file_suffixes=MARKDOWN_SUFFIXES,
    console_log_level=LogLevel.warning,
    file_log_level=LogLevel.info,
    log_to_file=False,
)


def global_settings() -> Settings:
    """
    Read access to global settings.
    """
    return _settings


_settings_lock = threading.RLock()


@contextmanager
def update_global_settings():
    """
    Context manager for thread-safe updates to global settings. Settings are
    checked on exit.
    """
    with _settings_lock:
        yield _settings
        check_settings(_settings)


def check_settings(settings: Settings) -> None:
    if settings.max_history_length < 1:
        raise InvalidState(
            f"History length must be at least 1: {settings.max_history_length}"
        )


## Tests


def test_log_level_parse():
    assert LogLevel.parse("WARN") == LogLevel.warning
    assert LogLevel.parse(" debug ") == LogLevel.debug
    try:
        LogLevel.parse("loud")
        assert False
    except ValueError as e:
        assert "Invalid log level" in str(e)


def test_update_global_settings():
    original = global_settings().max_history_length
    try:
        with update_global_settings() as settings:
            settings.max_history_length = 3
        assert global_settings().max_history_length == 3

        try:
            with update_global_settings() as settings:
                settings.max_history_length = 0
            assert False
        except InvalidState:
            pass
    finally:
        with update_global_settings() as settings:
            settings.max_history_length = original
