from readlist_api.schemas.book import BookRecord, EnrichedRecommendation
from readlist_api.schemas.recommendation import (
    RecommendationCandidate,
    RecommendationRequest,
    RecommendationsResponse,
    SeedBook,
)
from readlist_api.schemas.shelf import (
    LibraryAddRequest,
    LibraryEntryRead,
    LibraryReadUpdate,
    ShelfBook,
    WantToReadAddRequest,
    WantToReadEntryRead,
)

__all__ = [
    "BookRecord",
    "EnrichedRecommendation",
    "LibraryAddRequest",
    "LibraryEntryRead",
    "LibraryReadUpdate",
    "RecommendationCandidate",
    "RecommendationRequest",
    "RecommendationsResponse",
    "SeedBook",
    "ShelfBook",
    "WantToReadAddRequest",
    "WantToReadEntryRead",
]
