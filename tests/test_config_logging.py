"""Tests for config and logging."""

import io
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from compliance_tracker.config import DeadlineConfig, StoreConfig, TrackerConfig
from compliance_tracker.exceptions import ConfigurationError
from compliance_tracker.logging import JsonFormatter, setup_logging


class TestStoreConfig:
    """Tests for StoreConfig."""

    def test_default_values(self) -> None:
        config = StoreConfig()

        assert config.backend == "file"
        assert config.data_dir == Path("instance")
        assert config.filename == "compliance-store.json"

    def test_path(self) -> None:
        config = StoreConfig(data_dir=Path("/tmp/data"), filename="store.json")

        assert config.path == Path("/tmp/data/store.json")


class TestDeadlineConfig:
    """Tests for DeadlineConfig."""

    def test_default_values(self) -> None:
        config = DeadlineConfig()

        assert config.upcoming_limit == 5
        assert config.soon_window_days == 14
        assert config.reminder_window_days == 30
        assert config.reminder_offsets == (7, 3, 0)


class TestTrackerConfig:
    """Tests for TrackerConfig."""

    def test_default_values(self) -> None:
        config = TrackerConfig()

        assert config.store.backend == "file"
        assert config.deadlines.upcoming_limit == 5
        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.seed is None

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="backend"):
            TrackerConfig(store=StoreConfig(backend="sqlite"))

    def test_unknown_log_format_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="log format"):
            TrackerConfig(log_format="xml")

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            TrackerConfig(deadlines=DeadlineConfig(upcoming_limit=-1))

    def test_from_env_default(self) -> None:
        """Test from_env with no environment variables set."""
        with patch.dict(os.environ, {}, clear=True):
            config = TrackerConfig.from_env()

        assert config.store.backend == "file"
        assert config.store.path == Path("instance") / "compliance-store.json"
        assert config.deadlines.reminder_offsets == (7, 3, 0)
        assert config.log_level == "INFO"
        assert config.seed is None

    def test_from_env_custom(self) -> None:
        """Test from_env with custom environment variables."""
        env_vars = {
            "COMPLIANCE_STORE_BACKEND": "memory",
            "COMPLIANCE_DATA_DIR": "/var/lib/tracker",
            "COMPLIANCE_STORE_FILE": "store.json",
            "COMPLIANCE_UPCOMING_LIMIT": "10",
            "COMPLIANCE_SOON_DAYS": "7",
            "COMPLIANCE_REMINDER_WINDOW_DAYS": "60",
            "COMPLIANCE_REMINDER_OFFSETS": "14, 1",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
            "SEED": "42",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            config = TrackerConfig.from_env()

        assert config.store.backend == "memory"
        assert config.store.path == Path("/var/lib/tracker/store.json")
        assert config.deadlines.upcoming_limit == 10
        assert config.deadlines.soon_window_days == 7
        assert config.deadlines.reminder_window_days == 60
        assert config.deadlines.reminder_offsets == (14, 1)
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.seed == 42

    def test_from_env_bad_integer(self) -> None:
        with patch.dict(os.environ, {"COMPLIANCE_UPCOMING_LIMIT": "five"}, clear=True):
            with pytest.raises(ConfigurationError, match="COMPLIANCE_UPCOMING_LIMIT"):
                TrackerConfig.from_env()

    def test_from_env_bad_offsets(self) -> None:
        with patch.dict(os.environ, {"COMPLIANCE_REMINDER_OFFSETS": "7,x"}, clear=True):
            with pytest.raises(ConfigurationError):
                TrackerConfig.from_env()

    def test_from_env_negative_offsets(self) -> None:
        with patch.dict(os.environ, {"COMPLIANCE_REMINDER_OFFSETS": "7,-1"}, clear=True):
            with pytest.raises(ConfigurationError, match="negative"):
                TrackerConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("compliance_tracker").level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        setup_logging(format_type="json")

        logger = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        logger = logging.getLogger()
        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(logger.handlers) == 1

    def test_logs_to_stderr(self) -> None:
        setup_logging()

        handler = logging.getLogger().handlers[0]
        assert handler.stream is sys.stderr

    def test_external_loggers_quieted(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        defaults = dict(
            name="test.logger",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg="Test message",
            args=(),
            exc_info=None,
        )
        defaults.update(kwargs)
        return logging.LogRecord(**defaults)

    def test_format_basic(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.logger"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = self._record(level=logging.ERROR, msg="Error occurred", exc_info=exc_info)
        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "ERROR"
        assert "ValueError" in data["exception"]

    def test_format_with_extra(self) -> None:
        """Fields passed through ``extra=`` land at the top level."""
        record = self._record()
        record.obligation_id = "abc123"
        record.obligation_kind = "loan"

        data = json.loads(JsonFormatter().format(record))

        assert data["obligation_id"] == "abc123"
        assert data["obligation_kind"] == "loan"

    def test_standard_attributes_not_repeated(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert "pathname" not in data
        assert "lineno" not in data
        assert "args" not in data

    def test_registry_records_carry_obligation_id(self, registry, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="compliance_tracker"):
            loan = registry.add_loan_repayment("Bank Loan", date(2024, 2, 1), "5000", "monthly")

        record = next(r for r in caplog.records if "Added loan repayment" in r.getMessage())
        data = json.loads(JsonFormatter().format(record))
        assert data["obligation_id"] == loan.id
        assert data["obligation_kind"] == "loan"


class TestSetupLoggingStream:
    """Tests for routing records to a caller-supplied stream."""

    def test_json_lines_written_to_stream(self) -> None:
        stream = io.StringIO()
        setup_logging(format_type="json", stream=stream)

        logging.getLogger("compliance_tracker.test").info("hello", extra={"obligation_id": "x1"})

        data = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert data["message"] == "hello"
        assert data["obligation_id"] == "x1"


class TestPackageInit:
    """Tests for compliance_tracker __init__.py."""

    def test_version_exported(self) -> None:
        from compliance_tracker import __version__

        assert isinstance(__version__, str)
