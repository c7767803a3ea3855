import logging
import os
import threading
from functools import cache
from logging import Formatter
from pathlib import Path
from typing import Optional

import rich
from rich import reconfigure
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from mdspace.config.settings import APP_NAME, DOT_DIR, global_settings, LogLevel
from mdspace.config.text_styles import EMOJI_ERROR, EMOJI_WARN, MdspaceHighlighter, RICH_STYLES
from mdspace.util.format_utils import fmt_path

LOG_DIR_NAME = f"{DOT_DIR}/logs"
LOG_FILE_NAME = f"{APP_NAME}.log"

_log_root = Path(".")

_log_lock = threading.RLock()

_file_handler: Optional[logging.Handler] = None
_console_handler: Optional[logging.Handler] = None


def log_dir() -> Path:
    return _log_root / LOG_DIR_NAME


def log_file_path() -> Path:
    return log_dir() / LOG_FILE_NAME


@cache
def get_highlighter():
    return MdspaceHighlighter()


@cache
def get_theme():
    return Theme(RICH_STYLES)


reconfigure(theme=get_theme(), highlighter=get_highlighter())


def get_console() -> Console:
    return rich.get_console()


def logging_setup():
    """
    Set up or reset logging setup. Call at initial run and again if the log root
    changes. Replaces all previous mdspace handlers.
    """
    global _file_handler, _console_handler

    settings = global_settings()

    # Important logging to console, verbose logging to file if enabled.
    _console_handler = RichHandler(
        console=get_console(),
        level=settings.console_log_level.value,
        show_time=False,
        show_path=False,
        show_level=False,
        highlighter=get_highlighter(),
        markup=False,
    )
    _console_handler.setLevel(settings.console_log_level.value)
    _console_handler.setFormatter(Formatter("%(message)s"))

    handlers = [_console_handler]

    if settings.log_to_file:
        os.makedirs(log_dir(), exist_ok=True)
        _file_handler = logging.FileHandler(log_file_path())
        _file_handler.setLevel(settings.file_log_level.value)
        _file_handler.setFormatter(
            Formatter("%(asctime)s %(levelname).1s %(name)s - %(message)s")
        )
        handlers.append(_file_handler)
    else:
        _file_handler = None

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(min(handler.level for handler in handlers))
    logger.propagate = True
    # Remove any existing handlers.
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)


def prefix(line, warn_emoji: str = ""):
    return " ".join(filter(None, [warn_emoji, line]))


def prefix_args(args, warn_emoji: str = ""):
    if len(args) > 0:
        args = (prefix(args[0], warn_emoji),) + args[1:]
    return args


class CustomLogger:
    """
    Custom logger to be clearer about user messages.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, *args, **kwargs):
        self.logger.debug(*args, **kwargs)

    def info(self, *args, **kwargs):
        self.logger.info(*args, **kwargs)

    def message(self, *args, **kwargs):
        self.logger.warning(*args, **kwargs)

    def warning(self, *args, **kwargs):
        self.logger.warning(*prefix_args(args, warn_emoji=EMOJI_WARN), **kwargs)

    def error(self, *args, **kwargs):
        self.logger.error(*prefix_args(args, warn_emoji=EMOJI_ERROR), **kwargs)

    def log(self, level: LogLevel, *args, **kwargs):
        getattr(self, level.name)(*args, **kwargs)

    # Fallback for other attributes/methods.
    def __getattr__(self, attr):
        return getattr(self.logger, attr)


def get_logger(name: str):
    return CustomLogger(name)


def reset_logging(log_root: Optional[Path] = None):
    """
    Reset the logging root, if it has changed.
    """
    global _log_root
    with _log_lock:
        if log_root and log_root != _log_root:
            log = get_logger(__name__)
            log.info("Resetting log root: %s", fmt_path(log_file_path().absolute()))

            _log_root = log_root

        logging_setup()


## Tests


def test_custom_logger_prefixes(caplog):
    log = get_logger("mdspace.test_logger")
    with caplog.at_level(logging.DEBUG, logger="mdspace.test_logger"):
        log.warning("Stale path: %s", "/ws/a.md")
        log.message("Plain message")
        log.log(LogLevel.debug, "Debug %s", 1)

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == f"{EMOJI_WARN} Stale path: /ws/a.md"
    assert messages[1] == "Plain message"
    assert messages[2] == "Debug 1"
