"""Tier-specific skill gap analysis."""
from __future__ import annotations

import logging

from app.schemas import Tier
from orchestrator.state import GraphState, NodeDeps, NodeName
from orchestrator.utils import instrument_node

logger = logging.getLogger(__name__)

TIER_NODES = {
    Tier.JUNIOR: NodeName.JUNIOR_ANALYSIS,
    Tier.SENIOR: NodeName.SENIOR_ANALYSIS,
}


def build_node(deps: NodeDeps, tier: Tier):
    """Return the analysis node for ``tier``."""

    async def tier_analysis(state: GraphState) -> GraphState:
        result = await deps.llm.missing_skills(state["resume_text"], tier)
        missing_skills = result.missingSkills or []
        logger.info("%s analysis found %d missing skills", tier.value, len(missing_skills))
        return {"missing_skills": missing_skills}

    tier_analysis.__name__ = TIER_NODES[tier].value
    return instrument_node(TIER_NODES[tier], tier_analysis)
