"""Configuration service for managing client settings."""

import json
from pathlib import Path
from typing import Any

import structlog

from ..models import ClientConfig

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing client configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "crackwatch-search" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> ClientConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self._get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, Any] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (OSError, json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self._get_default_config()

    def save_config(self, config: ClientConfig) -> None:
        """Save configuration to file."""
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ValueError(f"Invalid configuration: {', '.join(validation_result.errors)}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = self._config_to_dict(config)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: ClientConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        # Validate endpoint
        if not isinstance(config.endpoint, str) or not config.endpoint.startswith(("ws://", "wss://")):
            errors.append("endpoint must be a ws:// or wss:// URL")
        elif not config.endpoint.endswith("/websocket"):
            errors.append("endpoint must end with /websocket")

        # Validate timeouts
        for name in ("connect_timeout", "receive_timeout"):
            value = getattr(config, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(f"{name} must be a positive number")
            elif value > 300:
                errors.append(f"{name} should not exceed 300 seconds")

        # Validate log_level
        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        # Validate command_prefix
        if not isinstance(config.command_prefix, str) or not config.command_prefix:
            errors.append("command_prefix cannot be empty")
        elif any(ch.isspace() for ch in config.command_prefix):
            errors.append("command_prefix cannot contain whitespace")

        # Validate max_message_length
        if isinstance(config.max_message_length, bool) or not isinstance(config.max_message_length, int):
            errors.append("max_message_length must be an integer")
        elif not 200 <= config.max_message_length <= 10000:
            errors.append("max_message_length must be between 200 and 10000")

        # Validate page_size
        if isinstance(config.page_size, bool) or not isinstance(config.page_size, int) or config.page_size < 1:
            errors.append("page_size must be a positive integer")

        return ValidationResult(len(errors) == 0, errors)

    def _get_default_config(self) -> ClientConfig:
        """Get default configuration."""
        return ClientConfig()

    def _config_to_dict(self, config: ClientConfig) -> dict[str, Any]:
        """Convert ClientConfig to dictionary for JSON serialization."""
        return {
            "endpoint": config.endpoint,
            "connect_timeout": config.connect_timeout,
            "receive_timeout": config.receive_timeout,
            "log_level": config.log_level,
            "command_prefix": config.command_prefix,
            "max_message_length": config.max_message_length,
            "page_size": config.page_size,
        }

    def _dict_to_config(self, data: dict[str, Any]) -> ClientConfig:
        """Convert dictionary to ClientConfig, filling gaps with defaults."""
        defaults = self._get_default_config()

        def number(key: str, fallback: float) -> float:
            raw = data.get(key, fallback)
            return float(raw) if isinstance(raw, (int, float)) and not isinstance(raw, bool) else fallback

        def integer(key: str, fallback: int) -> int:
            raw = data.get(key, fallback)
            return int(raw) if isinstance(raw, int) and not isinstance(raw, bool) else fallback

        def text(key: str, fallback: str) -> str:
            raw = data.get(key, fallback)
            return raw if isinstance(raw, str) else fallback

        return ClientConfig(
            endpoint=text("endpoint", defaults.endpoint),
            connect_timeout=number("connect_timeout", defaults.connect_timeout),
            receive_timeout=number("receive_timeout", defaults.receive_timeout),
            log_level=text("log_level", defaults.log_level).upper(),
            command_prefix=text("command_prefix", defaults.command_prefix),
            max_message_length=integer("max_message_length", defaults.max_message_length),
            page_size=integer("page_size", defaults.page_size),
        )
