"""Data models for the crackwatch search client."""

from .config import ClientConfig, DEFAULT_ENDPOINT
from .game import GameRecord, SearchResultSet, UNKNOWN_DATE
from .query import (
    MAX_SEARCH_TERM_LENGTH,
    CrackStatus,
    OrderType,
    ReleaseStatus,
    SearchQuery,
    StudioType,
)

__all__ = [
    "ClientConfig",
    "CrackStatus",
    "DEFAULT_ENDPOINT",
    "GameRecord",
    "MAX_SEARCH_TERM_LENGTH",
    "OrderType",
    "ReleaseStatus",
    "SearchQuery",
    "SearchResultSet",
    "StudioType",
    "UNKNOWN_DATE",
]
