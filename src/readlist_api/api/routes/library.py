from typing import Annotated

from fastapi import APIRouter, Depends, Query

from readlist_api.dependencies.auth import get_current_email, get_current_name
from readlist_api.dependencies.shelves import get_library_service
from readlist_api.domain import BookKey, UserEmail
from readlist_api.schemas.shelf import (
    LibraryAddRequest,
    LibraryEntries,
    LibraryReadUpdate,
    SuccessResponse,
)
from readlist_api.services.shelf_service import LibraryService

router = APIRouter(prefix="/library", tags=["library"])

_AUTH_RESPONSES = {
    401: {"description": "Not authenticated"},
    500: {"description": "Storage failure"},
}


@router.get("", response_model=LibraryEntries, responses=_AUTH_RESPONSES)
def list_library(
    email: Annotated[UserEmail, Depends(get_current_email)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> LibraryEntries:
    """List the reader's library, most recently added first."""
    return LibraryEntries(entries=svc.list_entries(email))


@router.post("", response_model=SuccessResponse, responses=_AUTH_RESPONSES)
def add_to_library(
    payload: LibraryAddRequest,
    email: Annotated[UserEmail, Depends(get_current_email)],
    name: Annotated[str | None, Depends(get_current_name)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> SuccessResponse:
    """Add a book, or refresh it and its read flag if already present."""
    svc.add(email, payload.book, read=payload.read, name=name)
    return SuccessResponse()


@router.patch("", response_model=SuccessResponse, responses=_AUTH_RESPONSES)
def update_read_status(
    payload: LibraryReadUpdate,
    email: Annotated[UserEmail, Depends(get_current_email)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
) -> SuccessResponse:
    svc.set_read(email, payload.key, payload.read)
    return SuccessResponse()


@router.delete("", response_model=SuccessResponse, responses=_AUTH_RESPONSES)
def remove_from_library(
    email: Annotated[UserEmail, Depends(get_current_email)],
    svc: Annotated[LibraryService, Depends(get_library_service)],
    key: str = Query(..., min_length=1, description="Catalog key to remove"),
) -> SuccessResponse:
    svc.remove(email, BookKey(key))
    return SuccessResponse()
