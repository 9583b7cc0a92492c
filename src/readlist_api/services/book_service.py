import asyncio
import logging
from collections.abc import Sequence

from readlist_api.clients.catalog import CatalogClient
from readlist_api.schemas.book import BookRecord

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, catalog: CatalogClient, min_query_length: int = 3) -> None:
        self.catalog = catalog
        self.min_query_length = min_query_length

    async def search(self, query: str, limit: int) -> list[BookRecord]:
        query = query.strip()
        if len(query) < self.min_query_length:
            return []
        return await self.catalog.search(query, limit=limit)

    async def get_details(self, key: str) -> BookRecord | None:
        return await self.catalog.get_details(key)

    async def resolve_selection(self, keys: Sequence[str]) -> list[BookRecord]:
        """Resolve selected keys to full records, skipping any the catalog cannot return."""
        books = await asyncio.gather(*(self.catalog.get_details(key) for key in keys))
        resolved = [book for book in books if book is not None]
        if len(resolved) < len(keys):
            logger.info("Resolved %s of %s selected books", len(resolved), len(keys))
        return resolved
