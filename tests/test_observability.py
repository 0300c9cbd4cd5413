"""
Tests for logging setup — level resolution, handler scope, file output.
"""

import logging
from pathlib import Path

from pomless.core.observability.logging_config import (
    LOG_LEVEL_ENV,
    LOGGER_NAME,
    parse_level,
    resolve_level,
    setup_logging,
)


class TestParseLevel:
    def test_known_levels(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("INFO") == logging.INFO

    def test_unknown_or_empty_means_warning(self):
        assert parse_level("chatty") == logging.WARNING
        assert parse_level("") == logging.WARNING
        assert parse_level(None) == logging.WARNING


class TestResolveLevel:
    def test_flags_in_order(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "CRITICAL")
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_env_then_default(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "INFO")
        assert resolve_level() == "INFO"
        monkeypatch.delenv(LOG_LEVEL_ENV)
        assert resolve_level() == "WARNING"


class TestSetupLogging:
    def test_configures_pomless_logger(self):
        logger = setup_logging("INFO")
        assert logger is logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_root_logger_untouched(self):
        root = logging.getLogger()
        host_handler = logging.NullHandler()
        root.addHandler(host_handler)
        level = root.level

        setup_logging("DEBUG", log_file=None)

        assert host_handler in root.handlers
        assert root.level == level

    def test_repeat_setup_replaces_own_handlers_only(self):
        logger = logging.getLogger(LOGGER_NAME)
        foreign = logging.NullHandler()
        logger.addHandler(foreign)

        setup_logging("WARNING")
        setup_logging("ERROR")

        assert foreign in logger.handlers
        assert len(logger.handlers) == 2

    def test_file_handler_lowers_logger_level(self, tmp_path: Path):
        log_file = tmp_path / "pomless.log"
        logger = setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logging.getLogger("pomless.core.services.parent_resolver").debug("walked to %s", "/tmp")
        for handler in logger.handlers:
            handler.flush()
        assert "walked to /tmp" in log_file.read_text()

    def test_other_namespaces_not_captured(self, tmp_path: Path):
        log_file = tmp_path / "pomless.log"
        setup_logging("DEBUG", log_file=str(log_file))

        logging.getLogger("hostbuild").warning("not ours")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()
        assert "not ours" not in log_file.read_text()
