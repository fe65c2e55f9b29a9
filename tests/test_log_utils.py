import logging
import os
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

from rich.logging import RichHandler

from flankstep import log_utils


class TestLogUtils:
    """Test suite for log_utils module."""

    def setup_method(self):
        """Reset logger state before each test."""
        for handler in log_utils.logger.handlers[:]:
            log_utils.logger.removeHandler(handler)
            handler.close()
        log_utils._file_handler = None
        log_utils._initialize_logger()

    def teardown_method(self):
        self.setup_method()

    def test_logger_initialization(self):
        assert log_utils.logger.name == "flankstep"
        assert not log_utils.logger.propagate
        rich_handlers = [
            h for h in log_utils.logger.handlers if isinstance(h, RichHandler)
        ]
        assert len(rich_handlers) == 1

    def test_logger_initialization_with_env_var(self):
        with patch.dict(os.environ, {"FLANKSTEP_LOG_LEVEL": "DEBUG"}):
            log_utils._initialize_logger()
            assert log_utils.logger.level == logging.DEBUG
            assert log_utils.logger.handlers[0].level == logging.DEBUG

    def test_logger_initialization_with_invalid_env_var(self):
        with patch.dict(os.environ, {"FLANKSTEP_LOG_LEVEL": "INVALID"}):
            log_utils._initialize_logger()
            assert log_utils.logger.level == logging.INFO

    def test_set_log_level_valid(self):
        log_utils.set_log_level("debug")
        assert log_utils.logger.level == logging.DEBUG
        assert log_utils.logger.handlers[0].level == logging.DEBUG

        log_utils.set_log_level("WARNING")
        assert log_utils.logger.level == logging.WARNING

    def test_set_log_level_invalid(self):
        original_level = log_utils.logger.level
        log_utils.set_log_level("NOPE")
        assert log_utils.logger.level == original_level

    def test_add_file_logging(self, tmp_path):
        log_file = log_utils.add_file_logging(tmp_path / "logs", "DEBUG")

        assert log_file == tmp_path / "logs" / "flankstep.log"
        file_handlers = [
            h for h in log_utils.logger.handlers if isinstance(h, RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG

        log_utils.logger.info("written to file")
        file_handlers[0].flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_add_file_logging_replaces_previous_handler(self, tmp_path):
        log_utils.add_file_logging(tmp_path / "one")
        log_utils.add_file_logging(tmp_path / "two")

        file_handlers = [
            h for h in log_utils.logger.handlers if isinstance(h, RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename.endswith(
            os.path.join("two", "flankstep.log")
        )

    def test_add_file_logging_invalid_level_defaults_to_info(self, tmp_path):
        log_utils.add_file_logging(tmp_path, "LOUD")
        assert log_utils._file_handler.level == logging.INFO
