from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from readlist_api.dependencies.database import get_db_session
from readlist_api.repositories.shelf_repository import LibraryRepository, WantToReadRepository
from readlist_api.repositories.users_repository import UsersRepository
from readlist_api.services.shelf_service import LibraryService, WantToReadService
from readlist_api.services.user_service import UserService


def get_user_service(session: Annotated[Session, Depends(get_db_session)]) -> UserService:
    return UserService(repo=UsersRepository(session=session))


def get_library_service(
    session: Annotated[Session, Depends(get_db_session)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> LibraryService:
    return LibraryService(repo=LibraryRepository(session=session), users=users)


def get_want_to_read_service(
    session: Annotated[Session, Depends(get_db_session)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> WantToReadService:
    return WantToReadService(repo=WantToReadRepository(session=session), users=users)
