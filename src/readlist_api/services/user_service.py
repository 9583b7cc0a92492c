from uuid import uuid4

from pydantic import validate_call

from readlist_api.domain import InternalUserId, UserEmail
from readlist_api.models import User as UserModel
from readlist_api.repositories.users_repository import UsersRepository
from readlist_api.schemas.user import UserRead


class UserService:
    def __init__(self, repo: UsersRepository) -> None:
        self.repo = repo

    def _map_to_schema(self, user_model: UserModel) -> UserRead:
        return UserRead(
            id=InternalUserId(user_model.id),
            email=UserEmail(user_model.email),
            name=user_model.name,
        )

    @validate_call
    def get_or_create_user(self, email: UserEmail, name: str | None = None) -> UserRead:
        existing = self.repo.get_by_email(email)
        if existing is not None:
            return self._map_to_schema(existing)

        user_id = InternalUserId(f"usr_{uuid4()}")
        user = self.repo.create_if_absent(id=user_id, email=email, name=name)
        return self._map_to_schema(user)
