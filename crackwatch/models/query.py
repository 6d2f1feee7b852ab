"""Search query models and the wire tokens of their filters."""

from dataclasses import dataclass
from enum import Enum

MAX_SEARCH_TERM_LENGTH = 100


class CrackStatus(Enum):
    """Filter on whether a game has been cracked."""
    ALL = 0
    CRACKED = 1
    UNCRACKED = 2


class ReleaseStatus(Enum):
    """Filter on whether a game has been released."""
    ALL = 0
    RELEASED = 1
    UNRELEASED = 2


class StudioType(Enum):
    """Filter on the size of the publishing studio."""
    ALL = 0
    AAA = 1
    INDIE = 2


class OrderType(Enum):
    """Sort keys accepted by the games.page method."""
    TITLE = "title"
    RELEASE_DATE = "releaseDate"
    CRACK_DATE = "crackDate"
    DRM = "protection"
    GROUP = "group"
    NFOS = "nfo"
    PRICE = "price"
    RATINGS = "ratings"
    COMMENTS = "comments"
    FOLLOWERS = "followers"


@dataclass(frozen=True)
class SearchQuery:
    """One page request against the games listing."""
    term: str
    page: int  # Zero-based
    crack_status: CrackStatus = CrackStatus.ALL
    release_status: ReleaseStatus = ReleaseStatus.ALL
    studio_type: StudioType = StudioType.ALL
    order_type: OrderType = OrderType.TITLE
    sort_descending: bool = False

    @classmethod
    def default(cls, term: str, page: int) -> "SearchQuery":
        """Query every game, sorted by title ascending."""
        return cls(term=term, page=page)
