"""Overall score and match derivation."""
from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

MATCH_THRESHOLD = 60.0


def round_half_up(value: float, places: int = 1) -> float:
    """Round like ``Number.toFixed``: ties go away from zero, not to even."""

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_overall_score(
    required: Sequence[Optional[float]],
    reported: Optional[float] = None,
    optional: Sequence[Optional[float]] = (),
) -> Optional[float]:
    """Average the sub-scores to one decimal when every ``required`` one is present.

    Non-null ``optional`` sub-scores join the mean; null ones are left out.
    Falls back to the model's self-reported ``reported`` score when a required
    sub-score is missing or none are configured.
    """

    if not required or any(score is None for score in required):
        return reported
    scores = [*required, *(score for score in optional if score is not None)]
    return round_half_up(sum(scores) / len(scores))


def is_matched(overall_score: Optional[float], reported: Optional[float] = None) -> bool:
    """Strict ``> 60`` check, degrading to the reported score and then to False."""

    if overall_score is not None:
        return overall_score > MATCH_THRESHOLD
    if reported is not None:
        return reported > MATCH_THRESHOLD
    return False
