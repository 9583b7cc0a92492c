from typing import Annotated

from fastapi import APIRouter, Depends

from readlist_api.dependencies.books import get_recommendation_service
from readlist_api.schemas.recommendation import RecommendationRequest, RecommendationsResponse
from readlist_api.services.recommendation_service import RecommendationService

router = APIRouter(tags=["recommendations"])


@router.post(
    "/recommend",
    response_model=RecommendationsResponse,
    summary="Recommend books",
    description=(
        "Asks the language model for books similar to the selection and resolves each "
        "suggestion against the catalog. An empty list means no suggestion could be "
        "matched; a 502 means the model itself failed."
    ),
    responses={502: {"description": "Recommendation model unavailable"}},
)
async def recommend_books(
    payload: RecommendationRequest,
    svc: Annotated[RecommendationService, Depends(get_recommendation_service)],
) -> RecommendationsResponse:
    recommendations = await svc.enrich(payload.books)
    return RecommendationsResponse(recommendations=recommendations)
