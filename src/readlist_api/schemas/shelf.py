from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field

from readlist_api.domain import BookKey
from readlist_api.schemas.base import CamelModel


class ShelfBook(CamelModel):
    key: BookKey = Field(description="Catalog key of the book", examples=["/works/OL45883W"])
    title: str = Field(min_length=1, examples=["Dune"])
    authors: list[str] = Field(default_factory=list, examples=[["Frank Herbert"]])
    cover_url: str | None = None


class LibraryAddRequest(CamelModel):
    book: ShelfBook
    read: bool = False


class LibraryReadUpdate(CamelModel):
    key: BookKey
    read: bool


class WantToReadAddRequest(CamelModel):
    book: ShelfBook


class ShelfEntryRead(CamelModel):
    key: str
    title: str
    authors: str = Field(description="Author names joined with ', '")
    cover_url: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LibraryEntryRead(ShelfEntryRead):
    read: bool


class WantToReadEntryRead(ShelfEntryRead):
    pass


class LibraryEntries(CamelModel):
    entries: list[LibraryEntryRead]


class WantToReadEntries(CamelModel):
    entries: list[WantToReadEntryRead]


class SuccessResponse(CamelModel):
    success: Literal[True] = True
