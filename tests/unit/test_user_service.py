from unittest.mock import patch

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from readlist_api.domain import InternalUserId, UserEmail
from readlist_api.models import User
from readlist_api.services.user_service import UserService


def test_first_sight_of_email_creates_user(user_service: UserService) -> None:
    # Given
    email = "new.reader@example.com"

    # When
    user = user_service.get_or_create_user(email, name="New Reader")

    # Then
    assert user.email == email
    assert user.name == "New Reader"
    assert user.id.startswith("usr_")


def test_known_email_returns_existing_user(user_service: UserService) -> None:
    # Given
    first = user_service.get_or_create_user("repeat@example.com")

    # When
    second = user_service.get_or_create_user("repeat@example.com", name="Ignored")

    # Then
    assert first.id == second.id
    assert second.name is None


def test_concurrent_first_writes_converge_on_one_user(
    user_service: UserService, db_session: Session
) -> None:
    # Given: another request inserted the user after this one's lookup missed
    user_service.repo.create_if_absent(
        id=InternalUserId("usr_0000"), email=UserEmail("race@example.com")
    )

    # When
    with patch.object(user_service.repo, "get_by_email", return_value=None):
        first = user_service.get_or_create_user("race@example.com")
        second = user_service.get_or_create_user("race@example.com")

    # Then
    assert first.id == second.id == "usr_0000"
    count = db_session.scalar(
        select(func.count()).select_from(User).where(User.email == "race@example.com")
    )
    assert count == 1


def test_service_validation_rejects_malformed_email(user_service: UserService) -> None:
    with pytest.raises(ValidationError):
        user_service.get_or_create_user("not-an-email")
