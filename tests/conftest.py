from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from readlist_api.database import Base
from readlist_api.dependencies.auth import get_current_email
from readlist_api.main import app
from readlist_api.repositories.shelf_repository import LibraryRepository, WantToReadRepository
from readlist_api.repositories.users_repository import UsersRepository
from readlist_api.services.shelf_service import LibraryService, WantToReadService
from readlist_api.services.user_service import UserService


@pytest.fixture(autouse=True)
def clear_dependency_overrides() -> Iterator[None]:
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def db_engine() -> Engine:
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine) -> Iterator[Session]:
    connection = db_engine.connect()
    transaction = connection.begin()
    session_factory = sessionmaker(bind=connection)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def test_email() -> str:
    return "reader@example.com"


@pytest.fixture
def user_service(db_session: Session) -> UserService:
    return UserService(repo=UsersRepository(session=db_session))


@pytest.fixture
def library_service(db_session: Session, user_service: UserService) -> LibraryService:
    return LibraryService(repo=LibraryRepository(session=db_session), users=user_service)


@pytest.fixture
def want_to_read_service(db_session: Session, user_service: UserService) -> WantToReadService:
    return WantToReadService(repo=WantToReadRepository(session=db_session), users=user_service)


@pytest.fixture
def client(db_session: Session) -> Iterator[TestClient]:
    from readlist_api.dependencies.database import get_db_session

    def override_get_db_session() -> Iterator[Session]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_with_overrides(client: TestClient, test_email: str) -> Iterator[TestClient]:
    def override_get_current_email() -> str:
        return test_email

    app.dependency_overrides[get_current_email] = override_get_current_email

    yield client
