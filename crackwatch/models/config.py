"""Configuration data models."""

from dataclasses import dataclass

DEFAULT_ENDPOINT = "wss://crackwatch.com/sockjs/crackwatch/discord_bot/websocket"


@dataclass(frozen=True)
class ClientConfig:
    """Client configuration settings."""
    endpoint: str = DEFAULT_ENDPOINT
    connect_timeout: float = 10.0
    receive_timeout: float = 30.0  # Upper bound on waiting for any single frame
    log_level: str = "INFO"
    command_prefix: str = "!crack"
    max_message_length: int = 2000
    page_size: int = 30  # Games per page on the remote side
