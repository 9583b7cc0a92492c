import json
import logging
import re
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from readlist_api.errors import RecommendationUnavailable
from readlist_api.schemas.recommendation import RecommendationCandidate, SeedBook

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a book recommendation expert with web search capabilities."

_JSON_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


def describe_seed(index: int, seed: SeedBook) -> str:
    line = f'{index}. "{seed.title}" by {", ".join(seed.authors)}'
    if seed.publish_year:
        line += f" ({seed.publish_year})"
    return line


def build_prompt(seeds: Sequence[SeedBook], count: int = 5) -> str:
    book_descriptions = "\n".join(
        describe_seed(index, seed) for index, seed in enumerate(seeds, start=1)
    )
    return (
        "You are an expert book recommendation engine with access to current web "
        "information about books, literary trends, and reader preferences.\n\n"
        "Based on the following books that a user has selected as their preferences:\n\n"
        f"{book_descriptions}\n\n"
        f"Please analyze these books and recommend {count} similar books that this reader "
        "would likely enjoy. Consider:\n"
        "- Similar genres, themes, and writing styles\n"
        "- Books frequently recommended together with these titles\n"
        "- Current popular books in related categories\n"
        "- Literary quality and reader satisfaction\n\n"
        "IMPORTANT: You must respond with ONLY a valid JSON array containing exactly "
        f'{count} objects, each with "title", "author", and "reason" fields (reason should '
        "be 1 short sentence). Do not include any other text, explanations, or formatting.\n\n"
        "Example format:\n"
        "[\n"
        '  {"title": "Book Title", "author": "Author Name", "reason": "Because ..."},\n'
        '  {"title": "Another Book", "author": "Another Author", "reason": "Because ..."}\n'
        "]"
    )


def parse_candidates(content: str, limit: int = 5) -> list[RecommendationCandidate]:
    """Parse the model reply into at most ``limit`` candidates.

    The reply should be a bare JSON array. When the model wraps it in prose or a
    code fence, the outermost ``[...]`` span is parsed instead. Elements that do
    not look like a candidate are dropped.
    """
    try:
        raw: Any = json.loads(content)
    except json.JSONDecodeError:
        match = _JSON_ARRAY_RE.search(content)
        if not match:
            return []
        try:
            raw = json.loads(match.group())
        except json.JSONDecodeError:
            return []

    if not isinstance(raw, list):
        return []

    candidates: list[RecommendationCandidate] = []
    for item in raw:
        try:
            candidates.append(RecommendationCandidate.model_validate(item))
        except ValidationError:
            logger.info("Discarding malformed recommendation entry: %r", item)
            continue
        if len(candidates) >= limit:
            break
    return candidates


class RecommendationClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str | None,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 400,
        count: int = 5,
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._count = count

    async def recommend(self, seeds: Sequence[SeedBook]) -> list[RecommendationCandidate]:
        if not self._api_key:
            logger.error("OpenAI API key is not configured")
            raise RecommendationUnavailable("Recommendation model is not configured")

        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(seeds, self._count)},
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            response = await self._http.post(
                f"{self._base_url}/chat/completions", json=payload, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.error("Recommendation request failed: %s", exc)
            raise RecommendationUnavailable("Recommendation request failed") from exc

        if not response.is_success:
            logger.error("Recommendation request returned status %s", response.status_code)
            raise RecommendationUnavailable(
                f"Recommendation model returned HTTP {response.status_code}"
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("Recommendation response has an unexpected shape")
            raise RecommendationUnavailable("Recommendation model returned no content") from exc

        if not isinstance(content, str):
            logger.error("Recommendation response content is not text")
            raise RecommendationUnavailable("Recommendation model returned no content")

        candidates = parse_candidates(content, limit=self._count)
        if not candidates:
            logger.error("Recommendation model returned no usable candidates")
            raise RecommendationUnavailable("Recommendation model returned no recommendations")

        logger.info(
            "Recommendation model returned candidates",
            extra={"seed_count": len(seeds), "candidate_count": len(candidates)},
        )
        return candidates
