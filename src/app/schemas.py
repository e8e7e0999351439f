"""Pydantic schemas for HTTP payloads and LLM structured outputs."""
from __future__ import annotations

import re
from enum import Enum
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class Tier(str, Enum):
    """Experience bucket that selects the analysis branch."""

    JUNIOR = "junior"
    SENIOR = "senior"


def _alias_choices(field_name: str, *extra: str) -> AliasChoices:
    """Return alias choices that accept camelCase and snake_case variants."""

    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", field_name).lower()
    return AliasChoices(field_name, snake, *extra)


class ExperienceEntry(BaseModel):
    """One job held by the candidate."""

    company: str = Field(..., validation_alias=_alias_choices("company"))
    duration: str = Field(..., validation_alias=_alias_choices("duration"))
    role: str = Field(..., validation_alias=_alias_choices("role"))
    responsibilities: list[str] = Field(
        default_factory=list, validation_alias=_alias_choices("responsibilities")
    )

    model_config = {"populate_by_name": True}


ANSWER_PREFIX = re.compile(r"(yes|no)\b")


class EvaluationAnswer(BaseModel):
    """Yes/no answer to one of the fixed resume evaluation questions."""

    question: str = Field(..., validation_alias=_alias_choices("question"))
    answer: Literal["yes", "no"] = Field(..., validation_alias=_alias_choices("answer"))
    reason: str = Field(default="", validation_alias=_alias_choices("reason"))

    model_config = {"populate_by_name": True}

    @field_validator("answer", mode="before")
    @classmethod
    def normalize_answer(cls, value: object) -> object:
        # "Yes.", "No - missing dates" and similar collapse to the bare word.
        if isinstance(value, str):
            value = value.strip().lower()
            match = ANSWER_PREFIX.match(value)
            if match:
                return match.group(1)
        return value


Score = Optional[float]


class ExtractedDetailsLLMResponse(BaseModel):
    """Candidate attributes and evaluation returned by the extraction call.

    Every field is nullable; the active pipeline variant decides which of them
    are requested from the model and copied into pipeline state.
    """

    email: Optional[str] = Field(default=None, validation_alias=_alias_choices("email"))
    phone: Optional[str] = Field(default=None, validation_alias=_alias_choices("phone"))
    experience: Optional[list[ExperienceEntry]] = Field(
        default=None, validation_alias=_alias_choices("experience")
    )
    totalExperienceInYears: Optional[float] = Field(
        default=None, validation_alias=_alias_choices("totalExperienceInYears")
    )
    summary: Optional[str] = Field(default=None, validation_alias=_alias_choices("summary"))
    strengths: Optional[list[str]] = Field(default=None, validation_alias=_alias_choices("strengths"))
    weaknesses: Optional[list[str]] = Field(default=None, validation_alias=_alias_choices("weaknesses"))
    suggestedRoles: Optional[list[str]] = Field(default=None, validation_alias=_alias_choices("suggestedRoles"))
    skillGaps: Optional[list[str]] = Field(default=None, validation_alias=_alias_choices("skillGaps"))
    impact: Score = Field(default=None, ge=0, le=100, validation_alias=_alias_choices("impact"))
    skillsScore: Score = Field(default=None, ge=0, le=100, validation_alias=_alias_choices("skillsScore"))
    experienceLevelScore: Score = Field(
        default=None, ge=0, le=100, validation_alias=_alias_choices("experienceLevelScore")
    )
    leadershipPotentialScore: Score = Field(
        default=None, ge=0, le=100, validation_alias=_alias_choices("leadershipPotentialScore")
    )
    adaptabilityScore: Score = Field(
        default=None, ge=0, le=100, validation_alias=_alias_choices("adaptabilityScore")
    )
    overallScore: Score = Field(default=None, validation_alias=_alias_choices("overallScore"))
    matched: Optional[bool] = Field(default=None, validation_alias=_alias_choices("matched"))
    evaluation: Optional[list[EvaluationAnswer]] = Field(
        default=None,
        validation_alias=_alias_choices("evaluation", "questionsAnswers", "questions_answers"),
    )

    model_config = {"populate_by_name": True}


class MissingSkillsLLMResponse(BaseModel):
    """Tier-specific skill gaps returned by the analysis call."""

    missingSkills: Optional[list[str]] = Field(default=None, validation_alias=_alias_choices("missingSkills"))

    model_config = {"populate_by_name": True}


class AnalyzeResumeRequest(BaseModel):
    """Payload accepted by POST /analyze-resume.

    Both fields are optional at the schema level so the route can answer with a
    400 instead of a validation error when one of them is missing.
    """

    fileBase64: Optional[str] = Field(default=None, validation_alias=_alias_choices("fileBase64"))
    filename: Optional[str] = Field(default=None, validation_alias=_alias_choices("filename"))

    model_config = {"populate_by_name": True}


class CandidateProfile(BaseModel):
    """Final pipeline state returned to the caller."""

    resumeText: str
    email: Optional[str] = None
    phone: Optional[str] = None
    experience: list[ExperienceEntry] = Field(default_factory=list)
    totalExperienceYears: Optional[float] = None
    summary: Optional[str] = None
    strengths: Optional[list[str]] = None
    weaknesses: Optional[list[str]] = None
    suggestedRoles: Optional[list[str]] = None
    skillGaps: Optional[list[str]] = None
    impact: Score = None
    skillsScore: Score = None
    experienceLevelScore: Score = None
    leadershipPotentialScore: Score = None
    adaptabilityScore: Score = None
    overallScore: Score = None
    matched: Optional[bool] = None
    evaluation: list[EvaluationAnswer] = Field(default_factory=list)
    tier: Optional[Tier] = None
    missingSkills: Optional[list[str]] = None


class CompanyReviewRequest(BaseModel):
    """Payload accepted by POST /v1/company-reviews."""

    companies: list[str] = Field(..., min_length=1, max_length=20)


class CompanyReview(BaseModel):
    name: str
    rating: str = "N/A"
    reviews: list[str] = Field(default_factory=list)


class CompanyReviewResponse(BaseModel):
    items: list[CompanyReview] = Field(default_factory=list)
