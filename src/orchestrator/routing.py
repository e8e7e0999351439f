"""Tier selection and branch routing."""
from __future__ import annotations

import logging

from app.schemas import Tier
from orchestrator.state import GraphState, NodeName

SENIOR_THRESHOLD_YEARS = 3.0

logger = logging.getLogger(__name__)


def select_tier(total_experience_years: float) -> Tier:
    """Return ``senior`` at or above the threshold, ``junior`` otherwise."""

    if total_experience_years >= SENIOR_THRESHOLD_YEARS:
        return Tier.SENIOR
    return Tier.JUNIOR


def route_decision(state: GraphState) -> str:
    """Pick the analysis node for the tier set by ``extract_details``."""

    tier = state.get("tier")
    decision = NodeName.SENIOR_ANALYSIS if tier == Tier.SENIOR else NodeName.JUNIOR_ANALYSIS
    logger.info("Routing tier=%s to %s", tier, decision.value)
    return decision.value
