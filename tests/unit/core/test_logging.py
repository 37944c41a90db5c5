# tests/unit/core/test_logging.py
"""Tests for structured logging configuration."""

import io
import json

import pytest


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        from rosecheck.core.logging import get_logger

        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_json_output(self) -> None:
        """JSON mode emits one JSON object per event."""
        from rosecheck.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)

        get_logger("test").info("check_started", name="demo", max_success=5)

        data = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert data["event"] == "check_started"
        assert data["name"] == "demo"
        assert data["max_success"] == 5
        assert "_record" not in data

    def test_console_output(self) -> None:
        """Console mode is human-readable, not JSON."""
        from rosecheck.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=False, stream=stream)

        get_logger("test").info("check_finished", passed=True)

        output = stream.getvalue()
        assert "check_finished" in output
        assert not output.strip().startswith("{")

    def test_defaults_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Log events never land on stdout, which carries the test report."""
        from rosecheck.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").warning("check_gave_up", num_tests=0)

        captured = capsys.readouterr()
        assert "check_gave_up" in captured.err
        assert captured.out == ""

    def test_level_filters(self) -> None:
        from rosecheck.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=True, level="WARNING", stream=stream)

        logger = get_logger("test")
        logger.info("hidden")
        logger.warning("shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "shown" in output
