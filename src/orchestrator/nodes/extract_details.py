"""LLM-powered resume extraction, scoring and tier assignment."""
from __future__ import annotations

import logging

from orchestrator.experience import resolve_total_experience
from orchestrator.routing import select_tier
from orchestrator.scoring import compute_overall_score, is_matched
from orchestrator.state import GraphState, NodeDeps, NodeName
from orchestrator.utils import instrument_node
from orchestrator.variants import NARRATIVE_FIELDS, SCORE_FIELDS, get_profile

logger = logging.getLogger(__name__)


def build_node(deps: NodeDeps):
    """Return extract_details node."""

    profile = get_profile(deps.variant)

    async def extract_details(state: GraphState) -> GraphState:
        today = deps.today()
        result = await deps.llm.extract_details(state["resume_text"], profile, today)

        experience = result.experience or []
        total_years = resolve_total_experience(result.totalExperienceInYears, experience, today)
        overall_score = compute_overall_score(
            [getattr(result, name) for name in profile.required_scores],
            result.overallScore,
            optional=[getattr(result, name) for name in profile.optional_scores],
        )
        matched = is_matched(overall_score, result.overallScore)
        tier = select_tier(total_years)

        update: GraphState = {
            "email": result.email,
            "phone": result.phone,
            "experience": experience,
            "total_experience_years": total_years,
            "overall_score": overall_score,
            "matched": matched,
            "evaluation": result.evaluation or [],
            "tier": tier,
        }
        if profile.narrative:
            for attr, key in NARRATIVE_FIELDS.items():
                update[key] = getattr(result, attr)
        for attr in profile.score_fields:
            update[SCORE_FIELDS[attr]] = getattr(result, attr)

        logger.info(
            "extracted %d experience entries (%.1f years, tier=%s, overall=%s, matched=%s)",
            len(experience),
            total_years,
            tier.value,
            overall_score,
            matched,
        )
        return update

    return instrument_node(NodeName.EXTRACT_DETAILS, extract_details)
