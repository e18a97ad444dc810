import logging
from typing import Any, Dict, Type, TypeVar
from pydantic import BaseModel, ValidationError

from errors import InvalidInputError, SchemaValidationError
from schemas import ATSAnalysisResult, ImprovementSuggestionsResult, SkillRecommendationResult
from .llm_groq import GroqClient
from .prompts import (
    ATS_SYSTEM_PROMPT,
    ATS_USER_TEMPLATE,
    SKILLS_SYSTEM_PROMPT,
    SKILLS_USER_TEMPLATE,
    SUGGESTIONS_SYSTEM_PROMPT,
    SUGGESTIONS_USER_TEMPLATE,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _require_text(value: str, field: str) -> str:
    if not value or not value.strip():
        raise InvalidInputError(f"{field} cannot be empty.")
    return value.strip()


def _validate(model: Type[M], payload: Dict[str, Any]) -> M:
    """Coerce raw model output into `model` or fail as a whole."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        logger.warning("%s validation failed on: %s", model.__name__, fields)
        raise SchemaValidationError(f"Model output does not match {model.__name__} ({fields})") from e


def run_compatibility_and_match_analysis(client: GroqClient, resume_text: str, job_description: str) -> ATSAnalysisResult:
    """Score a resume against a job description and collect improvement suggestions."""
    resume = _require_text(resume_text, "resume_text")
    jd = _require_text(job_description, "job_description")
    raw = client.complete_json(ATS_SYSTEM_PROMPT, ATS_USER_TEMPLATE.format(resume=resume, jd=jd))
    result = _validate(ATSAnalysisResult, raw)
    logger.info(
        "ATS analysis: compatibility=%.1f match=%.1f suggestions=%d",
        result.compatibility_score, result.match_score, len(result.suggestions),
    )
    return result


def run_skill_recommendation(client: GroqClient, job_description: str) -> SkillRecommendationResult:
    """Ask the model which skills a candidate should acquire for the role."""
    jd = _require_text(job_description, "job_description")
    raw = client.complete_json(SKILLS_SYSTEM_PROMPT, SKILLS_USER_TEMPLATE.format(jd=jd))
    result = _validate(SkillRecommendationResult, raw)
    logger.info("Skill recommendation: %d skills", len(result.skills))
    return result


def generate_improvement_suggestions(client: GroqClient, resume_text: str, job_description: str) -> ImprovementSuggestionsResult:
    resume = _require_text(resume_text, "resume_text")
    jd = _require_text(job_description, "job_description")
    raw = client.complete_json(SUGGESTIONS_SYSTEM_PROMPT, SUGGESTIONS_USER_TEMPLATE.format(resume=resume, jd=jd))
    return _validate(ImprovementSuggestionsResult, raw)
