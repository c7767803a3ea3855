import logging

from mdspace.config.logger import get_logger, log_file_path, reset_logging
from mdspace.config.settings import LogLevel, update_global_settings
from mdspace.model.events_model import EntriesDeleted
from mdspace.workspaces.workspace_session import WorkspaceSession


def test_file_logging(tmp_path):
    with update_global_settings() as settings:
        settings.log_to_file = True
        settings.file_log_level = LogLevel.debug
    try:
        reset_logging(tmp_path)
        session = WorkspaceSession("/ws")
        session.open_path("/ws/a.md")
        session.dispatch(EntriesDeleted(paths=("/ws/a.md",)))
        get_logger("mdspace.tests").warning("Done with %s", "/ws")

        for handler in logging.getLogger("mdspace").handlers:
            handler.flush()
        log_text = log_file_path().read_text()
        assert "Opened: /ws/a.md" in log_text
        assert "1 entry deleted" in log_text
        assert "Done with /ws" in log_text
        assert log_file_path().is_relative_to(tmp_path)
    finally:
        with update_global_settings() as settings:
            settings.log_to_file = False
            settings.file_log_level = LogLevel.info
        reset_logging()
