"""End-to-end tests that run the compiled LangGraph pipeline with a fake LLM."""

from dataclasses import dataclass
from typing import Any

import pytest

from app.schemas import CandidateProfile, Tier
from orchestrator.exceptions import ModelCallError, PipelineError
from orchestrator.graph import BRANCH_TARGETS, TRANSITIONS, build_graph
from orchestrator.routing import route_decision
from orchestrator.runner import OrchestratorRunner
from orchestrator.state import NodeName
from tests.fixtures import SAMPLE_RESUME, FakeLLM, make_deps, make_extraction


def test_transition_table_has_single_branch_point():
    selectors = [source for source, target in TRANSITIONS.items() if callable(target)]
    assert selectors == [NodeName.EXTRACT_DETAILS.value]
    assert TRANSITIONS[NodeName.EXTRACT_DETAILS.value] is route_decision
    assert set(BRANCH_TARGETS) == {"junior_analysis", "senior_analysis"}


@pytest.mark.asyncio
async def test_graph_routes_senior_candidates_to_senior_analysis():
    llm = FakeLLM()
    graph = build_graph(make_deps(llm))

    result = await graph.ainvoke({"resume_text": SAMPLE_RESUME})

    assert result["resume_text"] == SAMPLE_RESUME
    assert result["tier"] == Tier.SENIOR
    assert result["missing_skills"] == ["System Design", "Mentorship", "Project Management"]
    assert [call[0] for call in llm.calls] == ["extract_details", "missing_skills"]
    assert llm.calls[1][2] == Tier.SENIOR


@pytest.mark.asyncio
async def test_graph_routes_junior_candidates_to_junior_analysis():
    llm = FakeLLM(extraction=make_extraction(totalExperienceInYears=1.5))
    graph = build_graph(make_deps(llm))

    result = await graph.ainvoke({"resume_text": SAMPLE_RESUME})

    assert result["tier"] == Tier.JUNIOR
    assert result["missing_skills"] == ["AWS", "Docker", "CI/CD"]
    assert llm.calls[1][2] == Tier.JUNIOR


@pytest.mark.asyncio
async def test_graph_aborts_when_extraction_fails():
    llm = FakeLLM(fail_on="extract_details")
    graph = build_graph(make_deps(llm))

    with pytest.raises(ModelCallError):
        await graph.ainvoke({"resume_text": SAMPLE_RESUME})
    assert len(llm.calls) == 1


@pytest.mark.asyncio
async def test_runner_returns_candidate_profile():
    deps = make_deps(FakeLLM())
    runner = OrchestratorRunner(build_graph(deps), deps)

    profile = await runner.analyze(SAMPLE_RESUME)

    assert isinstance(profile, CandidateProfile)
    assert profile.resumeText == SAMPLE_RESUME
    assert profile.totalExperienceYears == 3.0
    assert profile.overallScore == 70.0
    assert profile.matched is True
    assert profile.tier == Tier.SENIOR
    assert profile.missingSkills == ["System Design", "Mentorship", "Project Management"]
    assert profile.experience[0].company == "ABC Corp"


@pytest.mark.asyncio
async def test_runner_wraps_model_failures_without_partial_results():
    deps = make_deps(FakeLLM(fail_on="missing_skills"))
    runner = OrchestratorRunner(build_graph(deps), deps)

    with pytest.raises(ModelCallError):
        await runner.analyze(SAMPLE_RESUME)


@dataclass
class ExplodingGraph:
    """Test double that mimics LangGraph's ainvoke but raises a non-pipeline error."""

    async def ainvoke(self, state: dict[str, Any]) -> dict[str, Any]:
        raise KeyError("resume_text")


@pytest.mark.asyncio
async def test_runner_wraps_unexpected_errors():
    runner = OrchestratorRunner(ExplodingGraph(), make_deps())

    with pytest.raises(PipelineError):
        await runner.analyze(SAMPLE_RESUME)
