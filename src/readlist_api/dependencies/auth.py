from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from pydantic import TypeAdapter, ValidationError

from readlist_api.domain import UserEmail

email_header = APIKeyHeader(name="X-User-Email", auto_error=False)
name_header = APIKeyHeader(name="X-User-Name", auto_error=False)

_user_email_adapter: TypeAdapter[UserEmail] = TypeAdapter(UserEmail)


def get_current_email(
    email: Annotated[str | None, Depends(email_header)] = None,
) -> UserEmail:
    if not email or not email.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    try:
        return _user_email_adapter.validate_python(email.strip().lower())
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        ) from exc


def get_current_name(
    name: Annotated[str | None, Depends(name_header)] = None,
) -> str | None:
    if not name or not name.strip():
        return None
    return name.strip()
