import asyncio
import logging

from readlist_api.debounce import Debouncer
from readlist_api.errors import CatalogUnavailable
from readlist_api.schemas.book import BookRecord
from readlist_api.services.book_service import BookService

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Failed to search books. Please try again."


class SearchSession:
    """Search-as-you-type state for one interactive client.

    Every keystroke goes through ``update_query``; only the last query after a
    quiet period reaches the catalog.
    """

    def __init__(
        self,
        books: BookService,
        limit: int = 10,
        wait: float = 0.5,
        min_query_length: int = 3,
    ) -> None:
        self.books = books
        self.limit = limit
        self.min_query_length = min_query_length
        self.query = ""
        self.results: list[BookRecord] = []
        self.is_loading = False
        self.error: str | None = None
        self._debouncer: Debouncer[list[BookRecord]] = Debouncer(self._search, wait)

    def update_query(self, query: str) -> asyncio.Task[list[BookRecord]]:
        self.query = query
        return self._debouncer.trigger(query)

    async def flush(self) -> list[BookRecord] | None:
        return await self._debouncer.flush()

    def close(self) -> None:
        self._debouncer.cancel()

    async def _search(self, query: str) -> list[BookRecord]:
        if len(query.strip()) < self.min_query_length:
            self.results = []
            self.is_loading = False
            self.error = None
            return self.results

        self.is_loading = True
        self.error = None
        try:
            self.results = await self.books.search(query, limit=self.limit)
        except CatalogUnavailable:
            logger.warning("Search for %r failed", query)
            self.error = SEARCH_FAILED_MESSAGE
            self.results = []
        finally:
            self.is_loading = False
        return self.results
