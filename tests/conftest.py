"""Shared fixtures for building server frames."""

import json
from collections.abc import Callable
from typing import Any

import pytest


def build_server_frame(message: dict[str, Any]) -> str:
    """Encode a DDP message the way the SockJS server sends it."""
    inner = json.dumps(message, separators=(",", ":"), ensure_ascii=False)
    return "a" + json.dumps([inner], separators=(",", ":"), ensure_ascii=False)


SAMPLE_GAMES: list[dict[str, Any]] = [
    {
        "title": "Assassin's Creed Origins",
        "releaseDate": "2017-10-27T00:00:00.000Z",
        "protections": ["Denuvo", "VMProtect", "Uplay"],
        "groups": ["CPY"],
        "crackDate": "2018-02-22T11:04:31.000Z",
        "followersCount": 8123,
    },
    {
        "title": "Red Dead Redemption 3",
        "releaseDate": None,
        "protections": [],
        "groups": [],
        "crackDate": None,
        "followersCount": 1,
    },
]


@pytest.fixture
def result_frame() -> Callable[..., str]:
    """Factory for result frames carrying a games listing."""
    def _build(games: list[dict[str, Any]] | None = None, game_count: int | None = None) -> str:
        games = SAMPLE_GAMES if games is None else games
        return build_server_frame({
            "msg": "result",
            "id": "1",
            "result": {
                "gameCount": len(games) if game_count is None else game_count,
                "games": games,
            },
        })
    return _build
