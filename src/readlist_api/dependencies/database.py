from collections.abc import Iterator

from sqlalchemy.orm import Session

from readlist_api.database import SessionLocal


def get_db_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
