from pydantic import ConfigDict, Field

from readlist_api.domain import BookKey
from readlist_api.schemas.base import CamelModel


class BookRecord(CamelModel):
    """Normalized catalog title, whichever catalog endpoint it came from."""

    key: BookKey = Field(description="Catalog key of the work", examples=["/works/OL45883W"])
    title: str = Field(description="Title of the book", examples=["Dune"])
    authors: list[str] = Field(
        default_factory=list,
        description="Author names in catalog order",
        examples=[["Frank Herbert"]],
    )
    publish_year: int | None = Field(default=None, examples=[1965])
    cover_url: str | None = Field(
        default=None, examples=["https://covers.openlibrary.org/b/id/11481354-M.jpg"]
    )
    description: str | None = None
    isbn: str | None = None
    publishers: list[str] | None = None
    subjects: list[str] | None = None

    model_config = ConfigDict(frozen=True)


class EnrichedRecommendation(BookRecord):
    reason: str = Field(
        description="Why the model suggested this book",
        examples=["Another sweeping desert-planet epic of politics and ecology."],
    )

    @classmethod
    def from_book(cls, book: BookRecord, reason: str) -> "EnrichedRecommendation":
        return cls(**book.model_dump(), reason=reason)


class LiveSearchUpdate(CamelModel):
    """One debounced search-as-you-type result pushed to the client."""

    query: str
    results: list[BookRecord] = Field(default_factory=list)
    error: str | None = None
