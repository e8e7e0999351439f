"""Application container wiring configuration."""
from __future__ import annotations

from typing import Optional

from app.config import Settings
from orchestrator.graph import build_graph
from orchestrator.runner import OrchestratorRunner
from orchestrator.state import NodeDeps
from services.cache import CacheService
from services.company_reviews import CompanyReviewService
from services.llm import LLMService


class AppContainer:
    """Simple service locator for FastAPI dependency injection."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.cache = CacheService(settings.redis_url)
        self.llm = LLMService(
            settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            timeout=settings.openai_timeout_seconds,
            max_input_chars=settings.max_resume_chars,
        )
        self.company_reviews: Optional[CompanyReviewService] = None
        if settings.serpapi_api_key:
            self.company_reviews = CompanyReviewService(
                api_key=settings.serpapi_api_key,
                cache=self.cache,
                ttl_seconds=settings.company_review_ttl_seconds,
            )
        node_deps = NodeDeps(settings=settings, llm=self.llm)
        self.graph = build_graph(node_deps)
        self.runner = OrchestratorRunner(self.graph, node_deps)
