from pydantic import BaseModel, Field

from readlist_api.schemas.base import CamelModel
from readlist_api.schemas.book import EnrichedRecommendation


class SeedBook(CamelModel):
    title: str = Field(min_length=1, description="Title of a selected book", examples=["Dune"])
    authors: list[str] = Field(default_factory=list, examples=[["Frank Herbert"]])
    publish_year: int | None = Field(default=None, examples=[1965])


class RecommendationCandidate(BaseModel):
    title: str = Field(min_length=1)
    author: str
    reason: str


class RecommendationRequest(CamelModel):
    books: list[SeedBook] = Field(
        min_length=1, description="Books the reader selected as taste signals"
    )


class RecommendationsResponse(CamelModel):
    recommendations: list[EnrichedRecommendation] = Field(
        description="Recommended books in the model's ranking order"
    )
