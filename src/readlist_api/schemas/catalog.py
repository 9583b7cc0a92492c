"""
Open Library payload shapes.

Search documents and work details are validated here, at the edge of the
catalog client, so nothing past ``CatalogClient`` handles raw JSON. Unknown
fields are ignored. Work descriptions come either as a plain string or as a
``{"type": "/type/text", "value": "..."}`` object.
"""

from pydantic import BaseModel, ConfigDict, Field


class OpenLibraryModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SearchDoc(OpenLibraryModel):
    key: str | None = None
    title: str = ""
    author_name: list[str] = Field(default_factory=list)
    first_publish_year: int | None = None
    cover_i: int | None = None
    isbn: list[str] = Field(default_factory=list)
    subject: list[str] | None = None
    publisher: list[str] | None = None
    language: list[str] | None = None


class SearchResponse(OpenLibraryModel):
    docs: list[SearchDoc] = Field(default_factory=list)
    num_found: int = Field(default=0, alias="numFound")
    start: int = 0


class TextValue(OpenLibraryModel):
    type: str | None = None
    value: str = ""


class AuthorKey(OpenLibraryModel):
    key: str


class AuthorRole(OpenLibraryModel):
    author: AuthorKey | None = None


class WorkDetail(OpenLibraryModel):
    key: str
    title: str = ""
    description: str | TextValue | None = None
    covers: list[int] = Field(default_factory=list)
    authors: list[AuthorRole] = Field(default_factory=list)
    publish_date: str | None = None
    first_publish_date: str | None = None
    isbn_13: list[str] = Field(default_factory=list)
    isbn_10: list[str] = Field(default_factory=list)
    publishers: list[str] | None = None
    subjects: list[str] | None = None

    def description_text(self) -> str | None:
        if isinstance(self.description, TextValue):
            text = self.description.value
        else:
            text = self.description
        if text is None:
            return None
        return text.strip() or None

    def author_keys(self) -> list[str]:
        return [role.author.key for role in self.authors if role.author is not None]


class AuthorDetail(OpenLibraryModel):
    name: str
