"""Unit tests for Decimal helpers, timing and logging setup."""

import logging
from decimal import Decimal

import pytest

from fairvalue.core.exceptions import MissingDataError
from fairvalue.core.numeric import (
    clamp,
    dsum,
    first_nonzero,
    first_positive,
    round_money,
    safe_div,
    to_decimal,
)
from fairvalue.core.timing import Timer
from fairvalue.logging_config import ColoredFormatter, get_logger, level_number, setup_logging


class TestNumeric:
    """Test suite for Decimal helpers."""

    def test_to_decimal(self):
        """Test conversion of every accepted input."""
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(3) == Decimal("3")
        assert to_decimal("2.50") == Decimal("2.50")
        assert to_decimal(None) == Decimal("0")
        assert to_decimal(None, Decimal("5")) == Decimal("5")

    def test_to_decimal_rejects_bool(self):
        """Test that booleans are not numbers here."""
        with pytest.raises(TypeError):
            to_decimal(True)

    def test_clamp(self):
        """Test clamping and bound validation."""
        assert clamp(Decimal("5"), Decimal("0"), Decimal("3")) == Decimal("3")
        assert clamp(Decimal("-1"), Decimal("0"), Decimal("3")) == Decimal("0")
        with pytest.raises(ValueError):
            clamp(Decimal("1"), Decimal("3"), Decimal("0"))

    def test_safe_div(self):
        """Test division with a zero denominator."""
        assert safe_div(Decimal("1"), Decimal("4")) == Decimal("0.25")
        assert safe_div(Decimal("1"), Decimal("0")) == Decimal("0")
        assert safe_div(Decimal("1"), Decimal("0"), Decimal("-1")) == Decimal("-1")

    def test_round_money_is_bankers(self):
        """Test half-even rounding to cents."""
        assert round_money(Decimal("1.005")) == Decimal("1.00")
        assert round_money(Decimal("1.015")) == Decimal("1.02")
        assert str(round_money(Decimal("7"))) == "7.00"

    def test_selection_helpers(self):
        """Test dsum and the first-value helpers."""
        assert dsum([]) == Decimal("0")
        assert isinstance(dsum([]), Decimal)
        assert first_positive(Decimal("0"), Decimal("-1"), Decimal("2")) == Decimal("2")
        assert first_positive(Decimal("0")) == Decimal("0")
        assert first_nonzero(Decimal("0"), Decimal("-1")) == Decimal("-1")


class TestMissingDataError:
    """Test suite for MissingDataError."""

    def test_message(self):
        """Test that the message names the symbol and the missing input."""
        error = MissingDataError("ABC", "price history", "no bars")
        assert str(error) == "ABC: missing price history (no bars)"
        assert error.symbol == "ABC"
        assert isinstance(error, RuntimeError)


class TestTimer:
    """Test suite for the Timer utility."""

    def test_context_manager(self, caplog):
        """Test elapsed time and log output."""
        with caplog.at_level(logging.INFO, logger="fairvalue.core.timing"):
            with Timer("Valuation") as timer:
                pass
        assert timer.elapsed is not None and timer.elapsed >= 0
        assert "Valuation: Completed in" in caplog.text

    def test_quiet(self, caplog):
        """Test that verbose=False suppresses output."""
        with caplog.at_level(logging.DEBUG, logger="fairvalue.core.timing"):
            with Timer("Quiet", verbose=False):
                pass
        assert "Quiet" not in caplog.text

    def test_decorator(self, caplog):
        """Test the decorator form."""
        @Timer.decorator("Scoring")
        def score():
            return 42

        with caplog.at_level(logging.INFO, logger="fairvalue.core.timing"):
            assert score() == 42
        assert "Scoring: Starting..." in caplog.text


class TestLoggingConfig:
    """Test suite for logging setup."""

    def test_file_logging(self, tmp_path, restore_root_logger):
        """Test that a log file path installs a file handler and creates its directory."""
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(level="DEBUG", log_file=str(log_file), colored=False)
        get_logger("fairvalue.test").debug("written to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert restore_root_logger.level == logging.DEBUG
        text = log_file.read_text(encoding="utf-8")
        assert "written to file" in text
        assert "fairvalue.test" in text

    def test_console_only_by_default(self, restore_root_logger):
        """Test that console-only setup adds no file handler."""
        setup_logging(level="WARNING")
        assert len(restore_root_logger.handlers) == 1
        assert not any(isinstance(h, logging.FileHandler) for h in restore_root_logger.handlers)
        assert logging.getLogger("pandas").level == logging.WARNING

    def test_quiet_loggers_follow_stricter_level(self, restore_root_logger):
        """Test that library loggers are never louder than the root."""
        setup_logging(level="ERROR")
        assert logging.getLogger("pandas").level == logging.ERROR

    def test_unknown_level(self):
        """Test that a misspelled level is rejected."""
        assert level_number(" debug ") == logging.DEBUG
        with pytest.raises(ValueError, match="Unknown log level"):
            level_number("LOUD")

    def test_colored_formatter_restores_record(self):
        """Test that coloring does not leak into other handlers."""
        record = logging.LogRecord("fairvalue", logging.WARNING, __file__, 1, "gap %s", ("30%",), None)
        output = ColoredFormatter("%(levelname)s %(message)s").format(record)
        assert "\033[33mWARNING\033[0m gap 30%" == output
        assert record.levelname == "WARNING"
