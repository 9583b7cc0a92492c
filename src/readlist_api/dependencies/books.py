from typing import Annotated

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from readlist_api.clients.catalog import CatalogClient
from readlist_api.clients.recommender import RecommendationClient
from readlist_api.config import settings
from readlist_api.services.book_service import BookService
from readlist_api.services.recommendation_service import RecommendationService
from readlist_api.services.search_session import SearchSession


def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    return connection.app.state.http_client


def get_catalog_client(
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> CatalogClient:
    return CatalogClient(
        http=http,
        base_url=settings.catalog_base_url,
        covers_base_url=settings.covers_base_url,
        cover_size=settings.cover_size,
    )


def get_recommendation_client(
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> RecommendationClient:
    return RecommendationClient(
        http=http,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
        count=settings.recommendation_count,
    )


def get_book_service(
    catalog: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> BookService:
    return BookService(catalog=catalog, min_query_length=settings.search_min_query_length)


def get_recommendation_service(
    recommender: Annotated[RecommendationClient, Depends(get_recommendation_client)],
    catalog: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> RecommendationService:
    """Dependency to provide the RecommendationService instance."""
    return RecommendationService(recommender=recommender, catalog=catalog)


def get_search_session(
    books: Annotated[BookService, Depends(get_book_service)],
) -> SearchSession:
    return SearchSession(
        books=books,
        limit=settings.search_default_limit,
        wait=settings.search_debounce_seconds,
        min_query_length=settings.search_min_query_length,
    )
