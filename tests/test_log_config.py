# ==============================================
# Tests for logging setup
# ==============================================

import logging
from pathlib import Path

import pytest

from datatransform.log_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_console_only(self, restore_root_logger):
        assert setup_logging("DEBUG") is None
        assert logging.getLogger().level == logging.DEBUG

    def test_file_per_run(self, restore_root_logger, tmp_path):
        log_dir = tmp_path / "logs"
        log_file = setup_logging("info", str(log_dir))

        logging.getLogger("datatransform.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.startswith(str(log_dir))
        assert log_file.endswith(".log")
        content = Path(log_file).read_text(encoding="utf-8")
        assert "hello" in content
