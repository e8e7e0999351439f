"""Score derivation, tier selection and branch routing."""

import pytest

from app.schemas import Tier
from orchestrator.routing import route_decision, select_tier
from orchestrator.scoring import compute_overall_score, is_matched, round_half_up


@pytest.mark.parametrize(
    ("impact", "skills", "expected", "matched"),
    [(80, 60, 70.0, True), (40, 60, 50.0, False), (61, 60, 60.5, True), (60, 60, 60.0, False)],
)
def test_two_score_average_and_strict_match(impact, skills, expected, matched):
    overall = compute_overall_score([impact, skills], reported=12)
    assert overall == expected
    assert is_matched(overall, reported=99) is matched


def test_average_rounds_to_one_decimal():
    assert compute_overall_score([75, 85, 80, 70, 81]) == 78.2


def test_missing_sub_score_falls_back_to_reported():
    assert compute_overall_score([80, None], reported=65) == 65


def test_optional_sub_scores_join_the_average_when_present():
    assert compute_overall_score([80, 60], reported=58, optional=[70, None, None]) == 70.0
    assert compute_overall_score([80, 60], optional=[None, None]) == 70.0
    assert compute_overall_score([None, 60], reported=58, optional=[90, 90]) == 58


def test_average_rounds_ties_upward():
    assert compute_overall_score([70.25, 70.25]) == 70.3
    assert round_half_up(1.25) == 1.3
    assert round_half_up(2.35) == 2.4


def test_no_configured_sub_scores_uses_reported():
    assert compute_overall_score([], reported=72.5) == 72.5
    assert compute_overall_score([]) is None


def test_match_degrades_to_reported_then_false():
    assert is_matched(None, reported=61) is True
    assert is_matched(None, reported=60) is False
    assert is_matched(None, None) is False


@pytest.mark.parametrize(("years", "tier"), [(0.0, Tier.JUNIOR), (2.9, Tier.JUNIOR), (3.0, Tier.SENIOR), (12.5, Tier.SENIOR)])
def test_select_tier_threshold(years, tier):
    assert select_tier(years) == tier


def test_route_decision_reads_tier():
    assert route_decision({"tier": Tier.SENIOR}) == "senior_analysis"
    assert route_decision({"tier": "senior"}) == "senior_analysis"
    assert route_decision({"tier": Tier.JUNIOR}) == "junior_analysis"


def test_route_decision_defaults_to_junior():
    assert route_decision({}) == "junior_analysis"
    assert route_decision({"tier": "principal"}) == "junior_analysis"
