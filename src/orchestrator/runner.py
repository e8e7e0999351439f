"""High-level pipeline runner built on top of LangGraph."""
from __future__ import annotations

import logging
from typing import Any

from app.schemas import CandidateProfile
from orchestrator.exceptions import PipelineError
from orchestrator.state import GraphState, NodeDeps

logger = logging.getLogger(__name__)

# state key -> response field
PROFILE_FIELDS = {
    "resume_text": "resumeText",
    "email": "email",
    "phone": "phone",
    "experience": "experience",
    "total_experience_years": "totalExperienceYears",
    "summary": "summary",
    "strengths": "strengths",
    "weaknesses": "weaknesses",
    "suggested_roles": "suggestedRoles",
    "skill_gaps": "skillGaps",
    "impact": "impact",
    "skills_score": "skillsScore",
    "experience_level_score": "experienceLevelScore",
    "leadership_potential_score": "leadershipPotentialScore",
    "adaptability_score": "adaptabilityScore",
    "overall_score": "overallScore",
    "matched": "matched",
    "evaluation": "evaluation",
    "tier": "tier",
    "missing_skills": "missingSkills",
}


class OrchestratorRunner:
    """Runs one pipeline per resume and shapes the final state for callers."""

    def __init__(self, graph, deps: NodeDeps):
        self._graph = graph
        self._deps = deps

    async def analyze(self, resume_text: str) -> CandidateProfile:
        """Run the pipeline on ``resume_text`` and return the candidate profile."""

        state = await self.run({"resume_text": resume_text})
        return self.to_profile(state)

    async def run(self, state: GraphState) -> GraphState:
        logger.info(
            "pipeline start (variant=%s, %d chars)",
            self._deps.variant.value,
            len(state.get("resume_text", "")),
        )
        try:
            result = await self._graph.ainvoke(state)
        except PipelineError:
            logger.exception("pipeline failed")
            raise
        except Exception as exc:
            logger.exception("pipeline failed unexpectedly")
            raise PipelineError(f"Pipeline failed: {exc}") from exc
        logger.info("pipeline complete (tier=%s)", result.get("tier"))
        return result

    @staticmethod
    def to_profile(state: GraphState) -> CandidateProfile:
        payload: dict[str, Any] = {
            field: state[key] for key, field in PROFILE_FIELDS.items() if state.get(key) is not None
        }
        return CandidateProfile.model_validate(payload)
