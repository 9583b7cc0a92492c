from typing import cast
from unittest.mock import MagicMock, create_autospec

import pytest

from readlist_api.clients.catalog import CatalogClient
from readlist_api.domain import BookKey
from readlist_api.errors import CatalogUnavailable
from readlist_api.schemas.book import BookRecord
from readlist_api.services.book_service import BookService


def make_catalog() -> MagicMock:
    return cast(MagicMock, create_autospec(CatalogClient, instance=True, spec_set=True))


def make_book(key: str = "/works/OL1W", title: str = "Dune") -> BookRecord:
    return BookRecord(key=BookKey(key), title=title, authors=["Frank Herbert"])


@pytest.mark.asyncio
async def test_search_delegates_trimmed_query() -> None:
    catalog = make_catalog()
    catalog.search.return_value = [make_book()]

    svc = BookService(catalog)
    result = await svc.search("  dune  ", limit=10)

    assert [b.key for b in result] == ["/works/OL1W"]
    catalog.search.assert_awaited_once_with("dune", limit=10)


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "du", "  d  "])
async def test_search_skips_catalog_for_short_queries(query: str) -> None:
    catalog = make_catalog()

    svc = BookService(catalog, min_query_length=3)
    result = await svc.search(query, limit=10)

    assert result == []
    catalog.search.assert_not_called()


@pytest.mark.asyncio
async def test_search_propagates_catalog_failure() -> None:
    catalog = make_catalog()
    catalog.search.side_effect = CatalogUnavailable("down")

    svc = BookService(catalog)
    with pytest.raises(CatalogUnavailable):
        await svc.search("dune", limit=10)


@pytest.mark.asyncio
async def test_get_details_returns_none_for_missing_book() -> None:
    catalog = make_catalog()
    catalog.get_details.return_value = None

    svc = BookService(catalog)

    assert await svc.get_details("/works/missing") is None
    catalog.get_details.assert_awaited_once_with("/works/missing")


@pytest.mark.asyncio
async def test_resolve_selection_skips_absent_books_and_keeps_order() -> None:
    catalog = make_catalog()
    books = {"/works/A": make_book("/works/A"), "/works/C": make_book("/works/C")}

    async def get_details(key: str) -> BookRecord | None:
        return books.get(key)

    catalog.get_details.side_effect = get_details

    svc = BookService(catalog)
    result = await svc.resolve_selection(["/works/C", "/works/B", "/works/A"])

    assert [b.key for b in result] == ["/works/C", "/works/A"]
