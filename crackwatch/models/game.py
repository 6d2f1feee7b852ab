"""Game-related data models."""

from dataclasses import dataclass
from datetime import date

# Stand-in for dates the service does not know (or sent garbage for).
UNKNOWN_DATE = date.min


@dataclass(frozen=True)
class GameRecord:
    """One game as listed by the release tracker."""
    name: str
    release_date: date
    drm_tags: tuple[str, ...]
    cracked_by: tuple[str, ...]
    crack_date: date
    follower_count: int

    @property
    def is_cracked(self) -> bool:
        """A game counts as cracked once it has a known crack date."""
        return self.crack_date != UNKNOWN_DATE


@dataclass(frozen=True)
class SearchResultSet:
    """A page of games plus the total number of matches."""
    total_count: int
    games: tuple[GameRecord, ...]

    def page_count(self, page_size: int = 30) -> int:
        """Number of pages needed to list every match."""
        if self.total_count <= 0:
            return 0
        return -(-self.total_count // page_size)
