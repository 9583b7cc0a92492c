from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from readlist_api.domain import InternalUserId, UserEmail
from readlist_api.models import User as UserModel


class UsersRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_email(self, email: UserEmail) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email)
        return self.session.scalars(stmt).first()

    def create_if_absent(
        self, id: InternalUserId, email: UserEmail, name: str | None = None
    ) -> UserModel:
        """
        Insert a user unless one with this email exists, and return the stored row.

        Uses ON CONFLICT (email) DO NOTHING, so concurrent first writes for the
        same email converge on a single row. An existing user keeps its id and name.
        """
        dialect = self.session.get_bind().dialect.name
        stmt: Any
        if dialect == "sqlite":
            stmt = sqlite_insert(UserModel)
        else:
            stmt = pg_insert(UserModel)
        stmt = stmt.values(id=id, email=email, name=name).on_conflict_do_nothing(
            index_elements=["email"]
        )

        self.session.execute(stmt)
        self.session.commit()

        return self.session.scalars(select(UserModel).where(UserModel.email == email)).one()
