import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from readlist_api.errors import CatalogUnavailable, RecommendationUnavailable, StorageFailure

logger = logging.getLogger(__name__)


async def catalog_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Failed to search books"},
    )


async def recommendation_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Failed to generate recommendations"},
    )


async def storage_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    # Storage detail is logged by the service; the client only sees the action.
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc) or "Operation failed"},
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    logger.info("Rejected malformed request", extra={"path": str(request.url.path)})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Bad request", "errors": jsonable_encoder(errors)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogUnavailable, catalog_unavailable_handler)
    app.add_exception_handler(RecommendationUnavailable, recommendation_unavailable_handler)
    app.add_exception_handler(StorageFailure, storage_failure_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
