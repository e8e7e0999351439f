"""Reusable test fixtures."""
from __future__ import annotations

from datetime import date

from app.config import PipelineVariant, Settings
from app.schemas import ExperienceEntry, ExtractedDetailsLLMResponse, MissingSkillsLLMResponse, Tier
from orchestrator.exceptions import ModelCallError
from orchestrator.state import NodeDeps

FIXED_TODAY = date(2025, 7, 15)
SAMPLE_RESUME = "Jane Doe\njane@example.com\nSoftware Engineer at ABC Corp, January 2020 – December 2022"


def make_settings(variant: PipelineVariant = PipelineVariant.STANDARD, **overrides) -> Settings:
    values = {"OPENAI_API_KEY": "sk-test", "PIPELINE_VARIANT": variant.value, **overrides}
    return Settings.model_validate(values)


def make_extraction(**overrides) -> ExtractedDetailsLLMResponse:
    """Extraction payload for a candidate with exactly three years at one job."""
    values = {
        "email": "jane@example.com",
        "phone": "555-0100",
        "experience": [
            ExperienceEntry(
                company="ABC Corp",
                duration="January 2020 – December 2022",
                role="Software Engineer",
                responsibilities=["Built APIs"],
            )
        ],
        "totalExperienceInYears": None,
        "summary": "Backend engineer",
        "strengths": ["APIs"],
        "weaknesses": ["No cloud"],
        "suggestedRoles": ["Backend Engineer"],
        "skillGaps": ["Kubernetes"],
        "impact": 80,
        "skillsScore": 60,
        "overallScore": 99,
        "matched": False,
        "evaluation": [{"question": "Well-organized and easy to read?", "answer": "yes", "reason": "Clear"}],
    }
    values.update(overrides)
    return ExtractedDetailsLLMResponse(**values)


class FakeLLM:
    """Returns canned responses and records which calls were made."""

    def __init__(self, extraction=None, missing=None, fail_on=None):
        self.extraction = extraction or make_extraction()
        self.missing = missing or {
            Tier.JUNIOR: MissingSkillsLLMResponse(missingSkills=["AWS", "Docker", "CI/CD"]),
            Tier.SENIOR: MissingSkillsLLMResponse(missingSkills=["System Design", "Mentorship", "Project Management"]),
        }
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    async def extract_details(self, resume_text, profile, today):
        self.calls.append(("extract_details", resume_text, profile.variant, today))
        if self.fail_on == "extract_details":
            raise ModelCallError("boom")
        return self.extraction

    async def missing_skills(self, resume_text, tier):
        self.calls.append(("missing_skills", resume_text, tier))
        if self.fail_on == "missing_skills":
            raise ModelCallError("boom")
        return self.missing[tier]


def make_deps(llm=None, variant: PipelineVariant = PipelineVariant.STANDARD, today: date = FIXED_TODAY) -> NodeDeps:
    return NodeDeps(settings=make_settings(variant), llm=llm or FakeLLM(), today=lambda: today)
