"""Tests for the logging service."""

import json
import os
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import patch

from hypothesis import given, strategies as st

from crackwatch.services.logging import MAX_FRAME_LOG_LENGTH, LoggingService, clip_frames, setup_logging


# Keys the processor chain reads or writes itself
RESERVED_KEYS = {
    "event", "level", "logger", "timestamp",
    "exc_info", "stack_info", "positional_args", "exception",
}


class TestLoggingService:
    """Test cases for LoggingService."""

    def test_development_logging_format(self) -> None:
        """Development logging is human-readable and goes to stderr."""
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            with patch("sys.stderr", new_callable=StringIO) as mock_stderr, \
                    patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                service = LoggingService(log_level="INFO")
                service.configure()

                service.get_logger("test").info("test message", key="value")

                output = mock_stderr.getvalue()
                assert mock_stdout.getvalue() == ""

        assert "test message" in output
        assert "[    INFO]" in output
        assert not output.strip().startswith("{")

    def test_production_logging_format(self) -> None:
        """Production logging is one JSON object per line."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
                service = LoggingService(log_level="INFO")
                service.configure()

                service.get_logger("test").info("test message", key="value")

                output = mock_stderr.getvalue()

        parsed = json.loads(output.strip().splitlines()[0])
        assert parsed["event"] == "test message"
        assert parsed["key"] == "value"
        assert "timestamp" in parsed
        assert parsed["level"] == "info"

    def test_level_filtering(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
                service = LoggingService(log_level="WARNING")
                service.configure()

                logger = service.get_logger("test")
                logger.info("quiet")
                logger.warning("loud")

                output = mock_stderr.getvalue()

        assert "quiet" not in output
        assert "loud" in output

    def test_console_can_be_disabled(self) -> None:
        with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
            service = LoggingService(log_level="INFO", console=False)
            service.configure()

            service.get_logger("test").info("nobody hears this")

            assert mock_stderr.getvalue() == ""

    def test_file_logging_setup(self) -> None:
        """File logging writes JSON lines to app.log and errors to error.log."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = Path(temp_dir)
            with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
                service = LoggingService(log_level="INFO", log_dir=log_dir, console=False)
                service.configure()

                logger = service.get_logger("test")
                logger.info("test file message", data="test")
                logger.error("test error message", error_code=500)

                app_lines = (log_dir / "app.log").read_text().strip().splitlines()
                error_lines = (log_dir / "error.log").read_text().strip().splitlines()

        assert [json.loads(line)["event"] for line in app_lines] == ["test file message", "test error message"]
        assert len(error_lines) == 1
        parsed = json.loads(error_lines[0])
        assert parsed["event"] == "test error message"
        assert parsed["error_code"] == 500
        assert parsed["level"] == "error"


class TestStructuredLoggingProperties:
    """Property-based tests for structured logging consistency."""

    @given(
        log_level=st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
        logger_name=st.text(min_size=1, max_size=50).filter(lambda x: x.isidentifier()),
        message=st.text(min_size=1, max_size=200),
        context_data=st.dictionaries(
            keys=st.text(min_size=1, max_size=20, alphabet="abcdefghijklmnopqrstuvwxyz_").filter(
                lambda x: not x.startswith("_") and x not in RESERVED_KEYS
            ),
            values=st.one_of(
                st.text(max_size=100),
                st.integers(),
                st.booleans()
            ),
            max_size=5
        )
    )
    def test_structured_logging_consistency(
        self,
        log_level: str,
        logger_name: str,
        message: str,
        context_data: dict[str, str | int | bool]
    ) -> None:
        """Every record carries event, level, logger, timestamp and all context."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
                service = LoggingService(log_level="DEBUG")
                service.configure()

                getattr(service.get_logger(logger_name), log_level.lower())(message, **context_data)

                output = mock_stderr.getvalue()

        parsed = json.loads(output.strip().splitlines()[0])
        assert parsed["event"] == message
        assert parsed["level"] == log_level.lower()
        assert parsed["logger"] == logger_name
        assert "T" in parsed["timestamp"]
        for key, value in context_data.items():
            assert parsed[key] == value


def test_setup_logging_function() -> None:
    """Test the setup_logging convenience function."""
    with tempfile.TemporaryDirectory() as temp_dir, patch.dict(os.environ, {}):
        service = setup_logging(
            log_level="DEBUG",
            log_dir=Path(temp_dir),
            environment="production",
            console=False,
        )

        assert isinstance(service, LoggingService)
        assert os.environ["ENVIRONMENT"] == "production"
        assert service.log_level == "DEBUG"

        service.get_logger("test_setup").info("setup test", component="test")

        parsed = json.loads((Path(temp_dir) / "app.log").read_text().strip())
        assert parsed["event"] == "setup test"
        assert parsed["component"] == "test"


def test_long_frames_are_clipped() -> None:
    frame = "a" + "x" * 1000

    event = clip_frames(None, "debug", {"event": "Frame received", "frame": frame, "payload": "short"})

    assert event["frame"] == frame[:MAX_FRAME_LOG_LENGTH] + "... (1001 chars)"
    assert event["payload"] == "short"


def test_frames_are_clipped_in_rendered_output() -> None:
    with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
        with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
            service = LoggingService(log_level="DEBUG")
            service.configure()

            service.get_logger("frames").debug("Frame received", frame="h" * 5000)

            output = mock_stderr.getvalue()

    parsed = json.loads(output.strip().splitlines()[0])
    assert parsed["frame"].endswith("... (5000 chars)")
    assert len(parsed["frame"]) < 400
