import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from readlist_api.domain import BookKey, UserEmail, join_authors
from readlist_api.errors import StorageFailure
from readlist_api.repositories.shelf_repository import LibraryRepository, WantToReadRepository
from readlist_api.schemas.shelf import LibraryEntryRead, ShelfBook, WantToReadEntryRead
from readlist_api.services.user_service import UserService

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise persistence errors as ``StorageFailure``."""
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Shelf storage error during %s", action)
        raise StorageFailure(f"Failed to {action}") from exc


class LibraryService:
    def __init__(self, repo: LibraryRepository, users: UserService) -> None:
        self.repo = repo
        self.users = users

    def list_entries(self, email: UserEmail) -> list[LibraryEntryRead]:
        with storage_errors(self.repo.session, "fetch library"):
            rows = self.repo.list_for_email(email)
            return [LibraryEntryRead.model_validate(row) for row in rows]

    def add(
        self, email: UserEmail, book: ShelfBook, read: bool = False, name: str | None = None
    ) -> None:
        with storage_errors(self.repo.session, "add book"):
            user = self.users.get_or_create_user(email, name)
            self.repo.upsert(
                user_id=user.id,
                key=book.key,
                title=book.title,
                authors=join_authors(book.authors),
                cover_url=book.cover_url,
                read=read,
            )
        logger.info("Library entry saved", extra={"book_key": book.key, "read": read})

    def set_read(self, email: UserEmail, key: BookKey, read: bool) -> None:
        with storage_errors(self.repo.session, "update read status"):
            updated = self.repo.set_read(email, key, read)
        logger.info(
            "Library read status updated",
            extra={"book_key": key, "read": read, "updated_count": updated},
        )

    def remove(self, email: UserEmail, key: BookKey) -> None:
        with storage_errors(self.repo.session, "delete entry"):
            deleted = self.repo.delete(email, key)
        logger.info("Library entry removed", extra={"book_key": key, "deleted_count": deleted})


class WantToReadService:
    def __init__(self, repo: WantToReadRepository, users: UserService) -> None:
        self.repo = repo
        self.users = users

    def list_entries(self, email: UserEmail) -> list[WantToReadEntryRead]:
        with storage_errors(self.repo.session, "fetch list"):
            rows = self.repo.list_for_email(email)
            return [WantToReadEntryRead.model_validate(row) for row in rows]

    def add(self, email: UserEmail, book: ShelfBook, name: str | None = None) -> None:
        with storage_errors(self.repo.session, "add book"):
            user = self.users.get_or_create_user(email, name)
            self.repo.upsert(
                user_id=user.id,
                key=book.key,
                title=book.title,
                authors=join_authors(book.authors),
                cover_url=book.cover_url,
            )
        logger.info("Want-to-read entry saved", extra={"book_key": book.key})

    def remove(self, email: UserEmail, key: BookKey) -> None:
        with storage_errors(self.repo.session, "delete entry"):
            deleted = self.repo.delete(email, key)
        logger.info(
            "Want-to-read entry removed", extra={"book_key": key, "deleted_count": deleted}
        )
