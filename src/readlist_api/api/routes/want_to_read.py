from typing import Annotated

from fastapi import APIRouter, Depends, Query

from readlist_api.dependencies.auth import get_current_email, get_current_name
from readlist_api.dependencies.shelves import get_want_to_read_service
from readlist_api.domain import BookKey, UserEmail
from readlist_api.schemas.shelf import SuccessResponse, WantToReadAddRequest, WantToReadEntries
from readlist_api.services.shelf_service import WantToReadService

router = APIRouter(prefix="/wanttoread", tags=["want-to-read"])

_AUTH_RESPONSES = {
    401: {"description": "Not authenticated"},
    500: {"description": "Storage failure"},
}


@router.get("", response_model=WantToReadEntries, responses=_AUTH_RESPONSES)
def list_want_to_read(
    email: Annotated[UserEmail, Depends(get_current_email)],
    svc: Annotated[WantToReadService, Depends(get_want_to_read_service)],
) -> WantToReadEntries:
    return WantToReadEntries(entries=svc.list_entries(email))


@router.post("", response_model=SuccessResponse, responses=_AUTH_RESPONSES)
def add_to_want_to_read(
    payload: WantToReadAddRequest,
    email: Annotated[UserEmail, Depends(get_current_email)],
    name: Annotated[str | None, Depends(get_current_name)],
    svc: Annotated[WantToReadService, Depends(get_want_to_read_service)],
) -> SuccessResponse:
    svc.add(email, payload.book, name=name)
    return SuccessResponse()


@router.delete("", response_model=SuccessResponse, responses=_AUTH_RESPONSES)
def remove_from_want_to_read(
    email: Annotated[UserEmail, Depends(get_current_email)],
    svc: Annotated[WantToReadService, Depends(get_want_to_read_service)],
    key: str = Query(..., min_length=1, description="Catalog key to remove"),
) -> SuccessResponse:
    svc.remove(email, BookKey(key))
    return SuccessResponse()
