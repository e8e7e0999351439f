"""OpenAI structured-output helper."""
from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Optional, Type, TypeVar

from openai import AsyncOpenAI, OpenAIError
from pydantic import AliasChoices, BaseModel, ValidationError

from app.schemas import ExtractedDetailsLLMResponse, MissingSkillsLLMResponse, Tier
from orchestrator.exceptions import ModelCallError, SchemaValidationError
from orchestrator.scoring import round_half_up
from orchestrator.variants import VariantProfile

T = TypeVar("T", bound=BaseModel)

EVALUATION_QUESTIONS = (
    "Are there grammatical/spelling mistakes?",
    "Well-organized and easy to read?",
    "Continuous learning through education?",
    "Mentions of self learning projects?",
    "Staying current with industry trends?",
    "Public repos/open-source contributions?",
    "Technical complexity over time?",
    "Mastery in multiple technical domains?",
    "Clear progression in responsibility scope?",
    "Significant work history gaps?",
)

EXTRACTION_CORE_PROMPT = """You are a highly skilled resume analyzer. Extract specific details from the resume and return VALID JSON ONLY, no markdown or backticks.
Use null for any field you cannot determine. Never omit a requested key and never invent facts.

Extract the following core details:
- email: the candidate's email address.
- phone: the candidate's phone number.
- experience: a list of work experiences, most recent first. Each item has:
    - company: name of the company.
    - duration: employment period formatted exactly as "Month Year – Month Year" with full English month names, a four-digit year and a spaced en dash (e.g., "January 2020 – December 2022"). Use "Present" as the end for the current job.
    - role: the candidate's role at the company.
    - responsibilities: an array of key responsibilities/achievements.
- totalExperienceInYears: total professional experience in years inferred from the durations, rounded to one decimal place. Treat "Present" as {current_month}."""

EXTRACTION_NARRATIVE_PROMPT = """
Provide an analysis grounded in the resume content:
- summary: a brief paragraph summarizing the candidate's profile.
- strengths: an array of concise bullet points highlighting key strengths.
- weaknesses: an array of concise bullet points highlighting potential weaknesses.
- suggested_roles: an array of suitable job titles for the candidate.
- skill_gaps: an array of technical skills or areas for improvement."""

EXTRACTION_EVALUATION_PROMPT = """
Answer each of the following questions with "yes" or "no" and a brief reason, returned as an "evaluation" array of {{"question", "answer", "reason"}} objects in this order:
{questions}"""

EXTRACTION_SCORES_PROMPT = """
Provide integer scores from 0 to 100 for the following metrics:
{metrics}
- overall_score: the average of the scores above, rounded to one decimal place.
- matched: true if overall_score is greater than 60, otherwise false."""

SCORE_DESCRIPTIONS = {
    "impact": "impact: quantifiable achievements and results.",
    "skillsScore": "skills_score: technical skills (relevance, depth, breadth).",
    "experienceLevelScore": "experience_level_score: experience level based on years and quality.",
    "leadershipPotentialScore": "leadership_potential_score: leadership potential.",
    "adaptabilityScore": "adaptability_score: adaptability to new tools and domains.",
}

JUNIOR_ANALYSIS_PROMPT = (
    "You are a career coach for junior developers. Analyze the resume and return a JSON object with exactly "
    "3 missing skills that would help them get better jobs. "
    'Example: {"missingSkills": ["AWS", "Docker", "CI/CD"]}'
)

SENIOR_ANALYSIS_PROMPT = (
    "You are a career coach for senior engineers. Analyze the resume and return a JSON object with exactly "
    "3 missing leadership or advanced skills. "
    'Example: {"missingSkills": ["System Design", "Mentorship", "Project Management"]}'
)

TIER_PROMPTS = {
    Tier.JUNIOR: JUNIOR_ANALYSIS_PROMPT,
    Tier.SENIOR: SENIOR_ANALYSIS_PROMPT,
}


def _snake(name: str) -> str:
    return "".join(f"_{char.lower()}" if char.isupper() else char for char in name)


def build_extraction_prompt(profile: VariantProfile, today: date) -> str:
    """Assemble the extraction system prompt for a pipeline variant."""

    sections = [EXTRACTION_CORE_PROMPT.format(current_month=today.strftime("%B %Y"))]
    example: dict[str, Any] = {
        "email": "test@example.com",
        "phone": "1234567890",
        "experience": [
            {
                "company": "ABC Corp",
                "duration": "January 2020 – December 2022",
                "role": "Software Engineer",
                "responsibilities": ["Developed X", "Managed Y"],
            }
        ],
        "totalExperienceInYears": 3.0,
    }
    if profile.narrative:
        sections.append(EXTRACTION_NARRATIVE_PROMPT)
        example.update(
            {
                "summary": "Experienced software engineer with...",
                "strengths": ["Excellent technical skills..."],
                "weaknesses": ["Limited experience in..."],
                "suggested_roles": ["Frontend Developer", "Full-Stack Engineer"],
                "skill_gaps": ["React Native or Flutter..."],
            }
        )
    if profile.evaluation:
        questions = "\n".join(f"- {question}" for question in EVALUATION_QUESTIONS)
        sections.append(EXTRACTION_EVALUATION_PROMPT.format(questions=questions))
        example["evaluation"] = [
            {"question": EVALUATION_QUESTIONS[0], "answer": "no", "reason": "No obvious errors found."},
            {
                "question": EVALUATION_QUESTIONS[1],
                "answer": "yes",
                "reason": "Clear headings and bullet points make it scannable.",
            },
        ]
    if profile.score_fields:
        metrics = "\n".join(f"- {SCORE_DESCRIPTIONS[name]}" for name in profile.score_fields)
        sections.append(EXTRACTION_SCORES_PROMPT.format(metrics=metrics))
        sample_scores = [75, 85, 80, 70, 80]
        for name, value in zip(profile.score_fields, sample_scores):
            example[_snake(name)] = value
        example["overall_score"] = round_half_up(sum(sample_scores[: len(profile.score_fields)]) / len(profile.score_fields))
        example["matched"] = example["overall_score"] > 60
    sections.append(
        "\nOutput strictly one JSON object with the keys above. Example:\n"
        + json.dumps(example, ensure_ascii=False, indent=2)
    )
    return "\n".join(sections)


class LLMService:
    """Wraps OpenAI JSON mode with pydantic validation; one attempt per call."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4.1-mini",
        temperature: float = 0.1,
        timeout: float = 60.0,
        max_input_chars: int = 20000,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._client = client or AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model
        self._temperature = temperature
        self._max_input_chars = max_input_chars
        self._logger = logging.getLogger(__name__)

    async def extract_details(
        self,
        resume_text: str,
        profile: VariantProfile,
        today: date,
    ) -> ExtractedDetailsLLMResponse:
        """Extract contact details, experience, narrative fields and scores."""

        return await self.invoke(
            system_prompt=build_extraction_prompt(profile, today),
            user_content=(resume_text or "")[: self._max_input_chars],
            schema=ExtractedDetailsLLMResponse,
            max_output_tokens=3000,
        )

    async def missing_skills(self, resume_text: str, tier: Tier) -> MissingSkillsLLMResponse:
        """Ask the tier-specific coach prompt for three missing skills."""

        return await self.invoke(
            system_prompt=TIER_PROMPTS[Tier(tier)],
            user_content=(resume_text or "")[: self._max_input_chars],
            schema=MissingSkillsLLMResponse,
            max_output_tokens=300,
        )

    async def invoke(
        self,
        system_prompt: str,
        user_content: str,
        schema: Type[T],
        max_output_tokens: int = 1200,
    ) -> T:
        """Run one JSON-mode completion and validate it against ``schema``."""

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ]
        raw_payload = await self._complete_json_mode(messages, max_output_tokens)
        result = self._validate_payload(schema, raw_payload)
        self._logger.info("Validated %s response (%d bytes)", schema.__name__, len(raw_payload.encode("utf-8")))
        return result

    async def _complete_json_mode(self, messages: list[dict[str, Any]], max_output_tokens: int) -> str:
        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                max_tokens=max_output_tokens,
                response_format={"type": "json_object"},
            )
        except OpenAIError as exc:
            self._logger.error("OpenAI chat completion failed: %s", exc)
            raise ModelCallError(f"Model call failed: {exc}") from exc
        content = completion.choices[0].message.content
        if not content:
            raise SchemaValidationError("ChatCompletion", "empty content")
        return content

    def _validate_payload(self, schema: Type[T], payload: str) -> T:
        """Validate payload, unwrapping a single-key envelope if the model added one."""

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise SchemaValidationError(schema.__name__, f"invalid JSON ({exc})") from exc
        if not isinstance(data, dict):
            raise SchemaValidationError(schema.__name__, f"expected a JSON object, got {type(data).__name__}")
        data = self._unwrap_envelope(schema, data)
        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            self._logger.warning("Validation failed for %s (%s)", schema.__name__, exc.errors())
            raise SchemaValidationError(schema.__name__, str(exc)) from exc

    def _unwrap_envelope(self, schema: Type[T], data: dict[str, Any]) -> dict[str, Any]:
        if len(data) != 1:
            return data
        key, value = next(iter(data.items()))
        if key in self._known_keys(schema) or not isinstance(value, dict):
            return data
        self._logger.warning("Unwrapping %r envelope around %s response", key, schema.__name__)
        return value

    @staticmethod
    def _known_keys(schema: Type[BaseModel]) -> set[str]:
        keys: set[str] = set()
        for name, field in schema.model_fields.items():
            keys.add(name)
            alias = field.validation_alias
            if isinstance(alias, AliasChoices):
                keys.update(choice for choice in alias.choices if isinstance(choice, str))
            elif isinstance(alias, str):
                keys.add(alias)
        return keys
