from collections.abc import Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import Select, delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from readlist_api.domain import BookKey, InternalUserId, UserEmail
from readlist_api.models import LibraryEntry, User, WantToReadEntry

EntryT = TypeVar("EntryT", LibraryEntry, WantToReadEntry)


class ShelfRepository(Generic[EntryT]):
    """Per-user shelf rows keyed by ``(user_id, key)``."""

    model: ClassVar[type[Any]]

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_email(self, email: UserEmail) -> Sequence[EntryT]:
        stmt = (
            select(self.model)
            .join(User, self.model.user_id == User.id)
            .where(User.email == email)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        return self.session.scalars(stmt).all()

    def upsert(
        self,
        user_id: InternalUserId,
        key: BookKey,
        title: str,
        authors: str,
        cover_url: str | None,
    ) -> None:
        self._upsert(
            {
                "user_id": user_id,
                "key": key,
                "title": title,
                "authors": authors,
                "cover_url": cover_url,
            }
        )

    def delete(self, email: UserEmail, key: BookKey) -> int:
        stmt = (
            delete(self.model)
            .where(self.model.key == key, self.model.user_id.in_(self._user_ids(email)))
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        self.session.commit()
        return max(getattr(result, "rowcount", 0), 0)

    def _upsert(self, values: dict[str, Any]) -> None:
        """
        Insert a row or overwrite its denormalized fields.

        Uses ON CONFLICT (user_id, key) DO UPDATE; ``created_at`` keeps the
        value from the first insert.
        """
        dialect = self.session.get_bind().dialect.name
        stmt: Any
        if dialect == "sqlite":
            stmt = sqlite_insert(self.model).values(values)
        else:
            stmt = pg_insert(self.model).values(values)

        updated = {
            column: stmt.excluded[column]
            for column in values
            if column not in ("user_id", "key")
        }
        stmt = stmt.on_conflict_do_update(index_elements=["user_id", "key"], set_=updated)

        self.session.execute(stmt)
        self.session.commit()

    @staticmethod
    def _user_ids(email: UserEmail) -> Select[tuple[str]]:
        return select(User.id).where(User.email == email)


class LibraryRepository(ShelfRepository[LibraryEntry]):
    model = LibraryEntry

    def upsert(
        self,
        user_id: InternalUserId,
        key: BookKey,
        title: str,
        authors: str,
        cover_url: str | None,
        read: bool = False,
    ) -> None:
        self._upsert(
            {
                "user_id": user_id,
                "key": key,
                "title": title,
                "authors": authors,
                "cover_url": cover_url,
                "read": read,
            }
        )

    def set_read(self, email: UserEmail, key: BookKey, read: bool) -> int:
        stmt = (
            update(LibraryEntry)
            .where(LibraryEntry.key == key, LibraryEntry.user_id.in_(self._user_ids(email)))
            .values(read=read)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        self.session.commit()
        return max(getattr(result, "rowcount", 0), 0)


class WantToReadRepository(ShelfRepository[WantToReadEntry]):
    model = WantToReadEntry
