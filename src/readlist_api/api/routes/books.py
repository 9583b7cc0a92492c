import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from readlist_api.config import settings
from readlist_api.dependencies.books import get_book_service, get_search_session
from readlist_api.schemas.book import BookRecord, LiveSearchUpdate
from readlist_api.services.book_service import BookService
from readlist_api.services.search_session import SearchSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["books"])


@router.get(
    "/search",
    response_model=list[BookRecord],
    responses={503: {"description": "Catalog unavailable"}},
)
async def search_books(
    svc: Annotated[BookService, Depends(get_book_service)],
    q: str = Query(..., description="Free-text title/author query"),
    limit: int = Query(settings.search_default_limit, ge=1, le=100, description="Max results"),
) -> list[BookRecord]:
    """Search the external catalog."""
    return await svc.search(q, limit=limit)


@router.get("/selection", response_model=list[BookRecord])
async def resolve_selection(
    svc: Annotated[BookService, Depends(get_book_service)],
    keys: list[str] = Query(..., min_length=1, max_length=50, description="Catalog keys"),
) -> list[BookRecord]:
    """Resolve selected catalog keys to full records; unknown keys are skipped."""
    return await svc.resolve_selection(keys)


@router.get("/detail/{key:path}", response_model=BookRecord)
async def get_book_detail(
    key: str,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> BookRecord:
    """Retrieve a single work's details."""
    book = await svc.get_details(key)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with key {key} not found",
        )
    return book


@router.websocket("/search/live")
async def live_search(
    websocket: WebSocket,
    session: Annotated[SearchSession, Depends(get_search_session)],
) -> None:
    """
    Search as the reader types.

    Every text frame is the current query. Only the last query after a quiet
    period is searched; its results are sent back as one ``LiveSearchUpdate``.
    """
    await websocket.accept()
    publishers: set[asyncio.Task[None]] = set()
    try:
        while True:
            query = await websocket.receive_text()
            search = session.update_query(query)
            publisher = asyncio.create_task(_publish(websocket, session, query, search))
            publishers.add(publisher)
            publisher.add_done_callback(publishers.discard)
    except WebSocketDisconnect:
        logger.info("Live search client disconnected")
    finally:
        session.close()
        for publisher in publishers:
            publisher.cancel()


async def _publish(
    websocket: WebSocket,
    session: SearchSession,
    query: str,
    search: asyncio.Task[list[BookRecord]],
) -> None:
    await asyncio.wait([search])
    if search.cancelled():
        return
    if search.exception() is not None:
        logger.error("Live search for %r failed", query, exc_info=search.exception())
        return
    update = LiveSearchUpdate(query=query, results=search.result(), error=session.error)
    await websocket.send_json(update.model_dump(mode="json", by_alias=True))
