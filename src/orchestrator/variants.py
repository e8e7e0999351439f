"""Pipeline variant profiles.

A variant decides which narrative fields the extraction call asks for and which
sub-scores are averaged into the overall score. ``impact`` and ``skillsScore``
must both be present for a local average; the richer variant adds whichever of
its extra sub-scores the model returned.
"""
from __future__ import annotations

from dataclasses import dataclass

from app.config import PipelineVariant

# response attribute -> state key
NARRATIVE_FIELDS = {
    "summary": "summary",
    "strengths": "strengths",
    "weaknesses": "weaknesses",
    "suggestedRoles": "suggested_roles",
    "skillGaps": "skill_gaps",
}
SCORE_FIELDS = {
    "impact": "impact",
    "skillsScore": "skills_score",
    "experienceLevelScore": "experience_level_score",
    "leadershipPotentialScore": "leadership_potential_score",
    "adaptabilityScore": "adaptability_score",
}
REQUIRED_SCORES = ("impact", "skillsScore")


@dataclass(frozen=True)
class VariantProfile:
    variant: PipelineVariant
    narrative: bool
    score_fields: tuple[str, ...]
    required_scores: tuple[str, ...] = ()

    @property
    def evaluation(self) -> bool:
        return self.narrative

    @property
    def optional_scores(self) -> tuple[str, ...]:
        return tuple(name for name in self.score_fields if name not in self.required_scores)


VARIANT_PROFILES = {
    PipelineVariant.BASIC: VariantProfile(PipelineVariant.BASIC, narrative=False, score_fields=()),
    PipelineVariant.STANDARD: VariantProfile(
        PipelineVariant.STANDARD,
        narrative=True,
        score_fields=REQUIRED_SCORES,
        required_scores=REQUIRED_SCORES,
    ),
    PipelineVariant.EXTENDED: VariantProfile(
        PipelineVariant.EXTENDED,
        narrative=True,
        score_fields=tuple(SCORE_FIELDS),
        required_scores=REQUIRED_SCORES,
    ),
}


def get_profile(variant: PipelineVariant) -> VariantProfile:
    return VARIANT_PROFILES[PipelineVariant(variant)]
