"""Search service: one query against crackwatch.com per call."""

from collections.abc import Callable

import structlog

from ..models.config import ClientConfig
from ..models.game import SearchResultSet
from ..models.query import MAX_SEARCH_TERM_LENGTH, SearchQuery
from .codec import FrameKind, classify_frame, decode_result, encode_query
from .errors import RemoteRejectionError, ValidationError
from .session import ConnectionSession

log = structlog.stdlib.get_logger()

SessionFactory = Callable[[], ConnectionSession]


class CrackwatchSearchService:
    """Runs searches, each over its own freshly opened session.

    Nothing is shared between calls, so any number of searches may run
    concurrently on the same service.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session_factory: SessionFactory | None = None,
    ) -> None:
        """Initialize the search service.

        Args:
            config: Client configuration (defaults if omitted)
            session_factory: Builds an unopened session per search; defaults
                to a ConnectionSession on the configured endpoint
        """
        self.config = config or ClientConfig()
        self._session_factory = session_factory or self._default_session

    def _default_session(self) -> ConnectionSession:
        return ConnectionSession(
            endpoint=self.config.endpoint,
            connect_timeout=self.config.connect_timeout,
            receive_timeout=self.config.receive_timeout,
        )

    async def search(self, term: str, page: int = 1) -> SearchResultSet:
        """Search the games listing.

        Args:
            term: Free-text search term, at most 100 characters
            page: 1-based page number

        Returns:
            The requested page of matching games

        Raises:
            ValidationError: If the term or page is out of bounds
            NetworkError: If the service cannot be reached
            RemoteRejectionError: If the service answered "Bad request"
            ProtocolError: If the reply could not be decoded
        """
        if len(term) > MAX_SEARCH_TERM_LENGTH:
            raise ValidationError(
                f"Search term was >{MAX_SEARCH_TERM_LENGTH} characters.",
                field="term",
                value=term,
            )
        if page < 1:
            raise ValidationError(
                "Page numbers start at 1.",
                field="page",
                value=page,
            )

        query = SearchQuery.default(term=term, page=page - 1)
        log.info("Searching crackwatch", term=term, page=page)

        async with self._session_factory() as session:
            await session.send_frame(encode_query(query))
            return await self._await_result(session, term)

    async def _await_result(self, session: ConnectionSession, term: str) -> SearchResultSet:
        """Read frames until the result (or a rejection) shows up."""
        skipped = 0
        while True:
            classified = classify_frame(await session.receive_frame())

            if classified.kind is FrameKind.ERROR:
                log.warning("Received a \"Bad request\" response", term=term)
                raise RemoteRejectionError(term=term)

            if classified.kind is FrameKind.OTHER:
                skipped += 1
                continue

            results = decode_result(classified.frame)
            log.info(
                "Search completed",
                term=term,
                total_count=results.total_count,
                returned=len(results.games),
                skipped_frames=skipped,
            )
            return results


async def search(term: str, page: int = 1, config: ClientConfig | None = None) -> SearchResultSet:
    """Convenience function running one search with a throwaway service."""
    return await CrackwatchSearchService(config=config).search(term, page)
