"""LangGraph state + dependency containers."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, TypedDict

from app.config import PipelineVariant, Settings
from app.schemas import EvaluationAnswer, ExperienceEntry, Tier
from services.llm import LLMService


class NodeName(str, Enum):
    """Identifiers of the pipeline nodes."""

    EXTRACT_DETAILS = "extract_details"
    JUNIOR_ANALYSIS = "junior_analysis"
    SENIOR_ANALYSIS = "senior_analysis"


class GraphState(TypedDict, total=False):
    """State passed between LangGraph nodes."""

    resume_text: str
    email: Optional[str]
    phone: Optional[str]
    experience: list[ExperienceEntry]
    total_experience_years: float
    summary: Optional[str]
    strengths: Optional[list[str]]
    weaknesses: Optional[list[str]]
    suggested_roles: Optional[list[str]]
    skill_gaps: Optional[list[str]]
    impact: Optional[float]
    skills_score: Optional[float]
    experience_level_score: Optional[float]
    leadership_potential_score: Optional[float]
    adaptability_score: Optional[float]
    overall_score: Optional[float]
    matched: bool
    evaluation: list[EvaluationAnswer]
    tier: Tier
    missing_skills: list[str]


@dataclass
class NodeDeps:
    """Dependencies injected into node functions."""

    settings: Settings
    llm: LLMService
    today: Callable[[], date] = field(default=date.today)

    @property
    def variant(self) -> PipelineVariant:
        return self.settings.pipeline_variant
