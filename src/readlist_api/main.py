import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from readlist_api.api.exception_handlers import register_exception_handlers
from readlist_api.api.routes.books import router as books_router
from readlist_api.api.routes.library import router as library_router
from readlist_api.api.routes.recommendations import router as recommendations_router
from readlist_api.api.routes.want_to_read import router as want_to_read_router
from readlist_api.config import settings
from readlist_api.database import dispose_engine
from readlist_api.logging_config import configure_logging
from readlist_api.middleware import RequestContextMiddleware

configure_logging(
    level=settings.log_level,
    output_format=settings.log_format,
    service_name=settings.log_service_name,
)
logger = logging.getLogger(__name__)
logger.info("Application bootstrapped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.http_timeout_seconds,
        headers={
            "User-Agent": f"{settings.log_service_name}/{settings.app_version}",
            "Accept": "application/json",
        },
    )
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        dispose_engine()
        logger.info("Application shut down")


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)
app.add_middleware(RequestContextMiddleware)
register_exception_handlers(app)
app.include_router(books_router)
app.include_router(recommendations_router)
app.include_router(library_router)
app.include_router(want_to_read_router)


@app.get("/health", tags=["health"])
def health_check() -> dict[str, str]:
    return {"status": "ok"}
