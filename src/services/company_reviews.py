"""Company review lookups via SerpAPI Google search results."""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Optional

import httpx

from app.schemas import CompanyReview
from services.cache import CacheService

SERPAPI_URL = "https://serpapi.com/search.json"
SENTENCE_BREAK = re.compile(r"\.\s+")
RATING_PATTERN = re.compile(r"([0-5]\.?[0-9]?)\s*stars?", re.IGNORECASE)
NO_REVIEWS = "No reviews found"
LOOKUP_FAILED = "Error fetching reviews"

logger = logging.getLogger(__name__)


def parse_review_snippet(name: str, snippet: Optional[str]) -> CompanyReview:
    """Turn a search result snippet into a rating and up to two review sentences."""

    if not snippet:
        return CompanyReview(name=name, rating="N/A", reviews=[NO_REVIEWS])
    sentences = [part.strip().rstrip(".") for part in SENTENCE_BREAK.split(snippet)[:2] if part.strip()]
    match = RATING_PATTERN.search(snippet)
    return CompanyReview(
        name=name,
        rating=match.group(1) if match else "N/A",
        reviews=sentences or [NO_REVIEWS],
    )


class CompanyReviewService:
    """Looks up Glassdoor review snippets for employers named in a resume."""

    def __init__(
        self,
        api_key: str,
        cache: CacheService,
        ttl_seconds: int = 86400,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._cache = cache
        self._ttl_seconds = ttl_seconds
        self._transport = transport

    async def fetch_reviews(self, companies: list[str]) -> list[CompanyReview]:
        """Fetch reviews for every company concurrently, preserving input order."""

        names = [name.strip() for name in companies if name and name.strip()]
        async with httpx.AsyncClient(timeout=20, transport=self._transport) as client:
            return list(await asyncio.gather(*(self._fetch_one(client, name) for name in names)))

    async def _fetch_one(self, client: httpx.AsyncClient, name: str) -> CompanyReview:
        cached = await self._cache.get_company_review(name)
        if cached:
            logger.debug("Company review cache hit for %s", name)
            return CompanyReview.model_validate(cached)
        params = {
            "engine": "google",
            "q": f"{name} company reviews site:glassdoor.com",
            "api_key": self._api_key,
        }
        try:
            resp = await client.get(SERPAPI_URL, params=params)
            resp.raise_for_status()
            data: Any = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Company review lookup failed for %s: %s", name, exc)
            return CompanyReview(name=name, rating="N/A", reviews=[LOOKUP_FAILED])
        results = data.get("organic_results") if isinstance(data, dict) else None
        first = results[0] if isinstance(results, list) and results else None
        snippet = first.get("snippet") if isinstance(first, dict) else None
        review = parse_review_snippet(name, snippet if isinstance(snippet, str) else None)
        await self._cache.set_company_review(name, review.model_dump(), ttl_seconds=self._ttl_seconds)
        return review
