"""Logging setup for the crackwatch search client.

Search results are printed on stdout, so every log record goes to stderr
or to the rotating files under ``log_dir``. Wire frames can be several
kilobytes long; the ``clip_frames`` processor keeps them readable.
"""

import logging
import logging.handlers
import os
import sys
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

import structlog

MAX_FRAME_LOG_LENGTH = 300

# Event keys that may carry raw wire frames
_FRAME_KEYS = ("frame", "payload")


def clip_frames(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Shorten raw frames in the event so a full games page never lands in one record."""
    _ = logger, method_name
    for key in _FRAME_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > MAX_FRAME_LOG_LENGTH:
            event_dict[key] = value[:MAX_FRAME_LOG_LENGTH] + f"... ({len(value)} chars)"
    return event_dict


def _rotating_handler(path: Path, max_bytes: int, backups: int, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=max_bytes,
        backupCount=backups,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


class LoggingService:
    """Configures structlog on top of stdlib logging handlers."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        console: bool = True,
    ) -> None:
        """Initialize the logging service.

        Args:
            log_level: The minimum log level to capture
            log_dir: Directory for app.log and error.log (None for no files)
            console: If False, nothing is written to stderr
        """
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.console = console
        self.is_development = os.getenv("ENVIRONMENT", "development") == "development"

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    def configure(self) -> None:
        """Install the handlers, then point structlog at them."""
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(self.numeric_level)
        for handler in self._build_handlers():
            root_logger.addHandler(handler)

        structlog.configure(
            processors=self._get_processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _build_handlers(self) -> list[logging.Handler]:
        handlers: list[logging.Handler] = []

        if self.console:
            stderr_handler = logging.StreamHandler(sys.stderr)
            stderr_handler.setLevel(self.numeric_level)
            if self.is_development:
                stderr_handler.setFormatter(logging.Formatter(
                    fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                    datefmt="%H:%M:%S",
                ))
            else:
                stderr_handler.setFormatter(logging.Formatter("%(message)s"))
            handlers.append(stderr_handler)

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handlers.append(_rotating_handler(
                self.log_dir / "app.log", 10 * 1024 * 1024, 5, self.numeric_level
            ))
            # Failures only, kept apart so they survive app.log rotation
            handlers.append(_rotating_handler(
                self.log_dir / "error.log", 5 * 1024 * 1024, 3, logging.ERROR
            ))

        return handlers

    def _get_processors(self) -> list[Any]:
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            clip_frames,
        ]

        # Files always get JSON, even while developing
        if self.is_development and not self.log_dir:
            processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
        else:
            processors.append(structlog.processors.JSONRenderer())
        return processors

    def get_logger(self, name: str | None = None) -> structlog.stdlib.BoundLogger:
        return structlog.stdlib.get_logger(name)


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str | None = None,
    console: bool = True,
) -> LoggingService:
    """Configure logging for the process and return the service.

    ``environment`` ("development" or "production") is exported as
    ``ENVIRONMENT`` before configuring, so it picks the renderer.
    """
    if environment:
        os.environ["ENVIRONMENT"] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, console=console)
    service.configure()
    return service
