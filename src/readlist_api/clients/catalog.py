"""
Open Library catalog client.

Two endpoints feed one record type: ``/search.json`` documents and
``/works/<id>.json`` details are both mapped into ``BookRecord`` so callers
never branch on where a book came from.

``search`` is used interactively and raises ``CatalogUnavailable`` on any
failure. ``get_details`` is best effort: a failed primary fetch yields
``None``, and a failed author lookup only drops that author.
"""

import asyncio
import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from readlist_api.domain import BookKey
from readlist_api.errors import CatalogUnavailable
from readlist_api.schemas.book import BookRecord
from readlist_api.schemas.catalog import AuthorDetail, SearchDoc, SearchResponse, WorkDetail

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    "key,title,author_name,first_publish_year,cover_i,isbn,subject,publisher,language"
)
_YEAR_RE = re.compile(r"\d{4}")


def build_cover_url(cover_id: int, covers_base_url: str, size: str = "M") -> str:
    return f"{covers_base_url.rstrip('/')}/b/id/{cover_id}-{size}.jpg"


def normalize_key(key: str) -> str:
    """Return a catalog path such as ``/works/OL45883W`` for a key or bare work id."""
    key = key.strip().lstrip("/")
    if "/" in key:
        return f"/{key}"
    return f"/works/{key}"


def _parse_year(*candidates: str | None) -> int | None:
    for value in candidates:
        if not value:
            continue
        match = _YEAR_RE.search(value)
        if match:
            return int(match.group())
    return None


class CatalogClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str = "https://openlibrary.org",
        covers_base_url: str = "https://covers.openlibrary.org",
        cover_size: str = "M",
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._covers_base_url = covers_base_url
        self._cover_size = cover_size

    async def search(self, query: str, limit: int) -> list[BookRecord]:
        params: dict[str, Any] = {
            "q": query,
            "limit": limit,
            "lang": "en",
            "fields": SEARCH_FIELDS,
        }
        try:
            response = await self._http.get(f"{self._base_url}/search.json", params=params)
        except httpx.HTTPError as exc:
            logger.warning("Catalog search failed query=%r error=%s", query, exc)
            raise CatalogUnavailable("Catalog search request failed") from exc

        if not response.is_success:
            logger.warning(
                "Catalog search returned status=%s query=%r", response.status_code, query
            )
            raise CatalogUnavailable(f"Catalog search returned HTTP {response.status_code}")

        try:
            payload = SearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Catalog search returned an unexpected body query=%r", query)
            raise CatalogUnavailable("Catalog search returned an unexpected body") from exc

        books: list[BookRecord] = []
        for doc in payload.docs:
            if not doc.key:
                continue
            try:
                books.append(self._from_search_doc(doc))
            except ValidationError:
                logger.warning("Skipping catalog search doc with invalid fields key=%r", doc.key)
        return books

    async def get_details(self, key: str) -> BookRecord | None:
        path = normalize_key(key)
        data = await self._get_json(path)
        if data is None:
            return None

        try:
            work = WorkDetail.model_validate(data)
        except ValidationError as exc:
            logger.warning("Catalog detail for %s has an unexpected shape: %s", path, exc)
            return None

        authors = await self._resolve_authors(work.author_keys())
        cover_ids = [cid for cid in work.covers if cid > 0]

        try:
            return BookRecord(
                key=BookKey(work.key),
                title=work.title,
                authors=authors,
                publish_year=_parse_year(work.publish_date, work.first_publish_date),
                cover_url=self._cover_url(cover_ids[0]) if cover_ids else None,
                description=work.description_text(),
                isbn=next(iter(work.isbn_13 or work.isbn_10), None),
                publishers=work.publishers,
                subjects=work.subjects,
            )
        except ValidationError as exc:
            logger.warning("Catalog detail for %s has invalid fields: %s", path, exc)
            return None

    async def _resolve_authors(self, author_keys: list[str]) -> list[str]:
        names = await asyncio.gather(*(self._author_name(key) for key in author_keys))
        return [name for name in names if name]

    async def _author_name(self, author_key: str) -> str | None:
        data = await self._get_json(author_key)
        if data is None:
            return None
        try:
            return AuthorDetail.model_validate(data).name
        except ValidationError:
            logger.info("Author %s has no name, skipping", author_key)
            return None

    async def _get_json(self, path: str) -> dict[str, Any] | None:
        url = f"{self._base_url}{path}.json"
        try:
            response = await self._http.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Catalog request to %s failed: %s", url, exc)
            return None
        if not response.is_success:
            logger.warning("Catalog request to %s returned status %s", url, response.status_code)
            return None
        try:
            data = response.json()
        except ValueError:
            logger.warning("Catalog request to %s returned invalid JSON", url)
            return None
        return data if isinstance(data, dict) else None

    def _cover_url(self, cover_id: int) -> str:
        return build_cover_url(cover_id, self._covers_base_url, self._cover_size)

    def _from_search_doc(self, doc: SearchDoc) -> BookRecord:
        return BookRecord(
            key=BookKey(doc.key or ""),
            title=doc.title,
            authors=doc.author_name,
            publish_year=doc.first_publish_year,
            cover_url=self._cover_url(doc.cover_i) if doc.cover_i and doc.cover_i > 0 else None,
            isbn=doc.isbn[0] if doc.isbn else None,
            publishers=doc.publisher,
            subjects=doc.subject,
        )
