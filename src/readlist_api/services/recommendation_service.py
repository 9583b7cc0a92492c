import asyncio
import json
import logging
import time
from collections.abc import Sequence

from pydantic import ValidationError

from readlist_api.clients.catalog import CatalogClient
from readlist_api.clients.recommender import RecommendationClient
from readlist_api.errors import CatalogUnavailable
from readlist_api.schemas.book import BookRecord, EnrichedRecommendation
from readlist_api.schemas.recommendation import RecommendationCandidate, SeedBook

logger = logging.getLogger(__name__)


def to_seed(book: BookRecord | SeedBook) -> SeedBook:
    return SeedBook(title=book.title, authors=list(book.authors), publish_year=book.publish_year)


class RecommendationService:
    def __init__(self, recommender: RecommendationClient, catalog: CatalogClient) -> None:
        self.recommender = recommender
        self.catalog = catalog

    async def enrich(
        self, selected_books: Sequence[BookRecord | SeedBook]
    ) -> list[EnrichedRecommendation]:
        """
        Ask the model for candidates, then resolve each one against the catalog.

        ``RecommendationUnavailable`` from the model propagates as is. Candidates
        that fail to resolve are dropped; the rest keep the model's order.
        """
        start_time = time.perf_counter()

        # 1. Model call must finish before any catalog lookups
        seeds = [to_seed(book) for book in selected_books]
        candidates = await self.recommender.recommend(seeds)

        # 2. Resolve candidates concurrently; gather keeps input order
        resolved = await asyncio.gather(*(self._resolve(c) for c in candidates))
        recommendations = [rec for rec in resolved if rec is not None]

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        log_event = {
            "event_name": "recommendations_enriched",
            "seed_count": len(seeds),
            "candidate_count": len(candidates),
            "resolved_count": len(recommendations),
            "dropped_count": len(candidates) - len(recommendations),
            "latency_ms": latency_ms,
        }
        logger.info("TELEMETRY: %s", json.dumps(log_event))

        return recommendations

    async def _resolve(self, candidate: RecommendationCandidate) -> EnrichedRecommendation | None:
        query = f"{candidate.title} {candidate.author}"
        try:
            results = await self.catalog.search(query, limit=1)
            if not results:
                logger.info("Dropping recommendation %r: no catalog match", query)
                return None
            return EnrichedRecommendation.from_book(results[0], reason=candidate.reason)
        except (CatalogUnavailable, ValidationError) as exc:
            logger.warning("Dropping recommendation %r: catalog lookup failed (%s)", query, exc)
            return None
