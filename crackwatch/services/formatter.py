"""Rendering of search results into size-bounded text blocks."""

import json

from ..models.game import GameRecord, SearchResultSet
from .drm import DRMNormalizer, get_drm_normalizer

HEADER = "```Game Name | Release Date | DRM | Cracked By | Date Cracked\n"
NO_RESULTS_MESSAGE = "No games found which matched your query!"


def format_game_line(game: GameRecord, normalizer: DRMNormalizer | None = None) -> str:
    """One line per game; uncracked games show how many people wait for it."""
    if not game.is_cracked:
        people = "person" if game.follower_count == 1 else "people"
        name = json.dumps(game.name, ensure_ascii=False)
        return f"🛑{name} has {game.follower_count:,} {people} waiting for a crack!"

    normalizer = normalizer or get_drm_normalizer()
    return " | ".join([
        f"🟢{game.name}",
        game.release_date.isoformat(),
        normalizer.normalize(game.drm_tags),
        "+".join(game.cracked_by),
        game.crack_date.isoformat(),
    ])


def format_results(
    results: SearchResultSet,
    page: int,
    max_length: int = 2000,
    page_size: int = 30,
) -> list[str]:
    """Pack the results into code-fenced blocks of at most ``max_length``.

    Blocks are split on line boundaries; a single line longer than a block
    is cut wherever it has to be.
    """
    footer = f"\nPage {page}/{results.page_count(page_size)}```"
    budget = max_length - len(HEADER) - len(footer)
    if budget <= 0:
        raise ValueError(f"max_length {max_length} leaves no room for results")

    body = "\n".join(format_game_line(game) for game in results.games)
    blocks: list[str] = []
    while len(body) > budget:
        cut = body.rfind("\n", 0, budget + 1)
        if cut <= 0:
            blocks.append(HEADER + body[:budget] + footer)
            body = body[budget:]
            continue
        blocks.append(HEADER + body[:cut] + footer)
        body = body[cut + 1:]

    blocks.append(HEADER + body + footer)
    return blocks
