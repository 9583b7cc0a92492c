import typing
from typing import Annotated

from pydantic import Field

if typing.TYPE_CHECKING:
    BookKey = typing.NewType("BookKey", str)
    UserEmail = typing.NewType("UserEmail", str)
    InternalUserId = typing.NewType("InternalUserId", str)
else:
    _BookKeyStr = Annotated[str, Field(min_length=1, max_length=255)]
    BookKey = typing.NewType("BookKey", _BookKeyStr)

    _UserEmailStr = Annotated[
        str, Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    ]
    UserEmail = typing.NewType("UserEmail", _UserEmailStr)

    _InternalUserIdStr = Annotated[str, Field(pattern=r"^usr_[a-f0-9\-]+$")]
    InternalUserId = typing.NewType("InternalUserId", _InternalUserIdStr)

AUTHORS_DELIMITER = ", "


def join_authors(authors: typing.Sequence[str]) -> str:
    return AUTHORS_DELIMITER.join(authors)
