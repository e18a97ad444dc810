from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import List

SCORE_MIN = 0.0
SCORE_MAX = 100.0


def _clean_items(items: List[str]) -> List[str]:
    return [s.strip() for s in items if s.strip()]


# Input to the two-text operations (ATS analysis, improvement suggestions)
class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    resume_text: str = Field(min_length=1)
    job_description: str = Field(min_length=1)


class SkillRequest(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    job_description: str = Field(min_length=1)


class ATSAnalysisResult(BaseModel):
    """Compatibility and match scores (0-100) plus ordered improvement suggestions."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    compatibility_score: float = Field(
        validation_alias=AliasChoices("compatibility_score", "ats_compatibility_score")
    )
    match_score: float = Field(
        validation_alias=AliasChoices("match_score", "resume_to_job_description_match_score")
    )
    suggestions: List[str] = Field(
        validation_alias=AliasChoices("suggestions", "improvement_suggestions")
    )

    @field_validator("compatibility_score", "match_score", mode="before")
    @classmethod
    def _strip_percent(cls, v):
        # bool is an int subclass; true/false is not a score
        if isinstance(v, bool):
            raise ValueError("score must be a number, not a boolean")
        # Models sometimes answer "75%" instead of 75
        if isinstance(v, str):
            return v.strip().rstrip("%").strip()
        return v

    @field_validator("compatibility_score", "match_score")
    @classmethod
    def _clamp(cls, v: float) -> float:
        return max(SCORE_MIN, min(SCORE_MAX, v))

    @field_validator("suggestions")
    @classmethod
    def _clean(cls, v: List[str]) -> List[str]:
        return _clean_items(v)


class SkillRecommendationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    skills: List[str]

    @field_validator("skills")
    @classmethod
    def _clean(cls, v: List[str]) -> List[str]:
        return _clean_items(v)


class ImprovementSuggestionsResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    suggestions: List[str]

    @field_validator("suggestions")
    @classmethod
    def _clean(cls, v: List[str]) -> List[str]:
        return _clean_items(v)


# Aggregate returned to the dashboard
class AnalysisReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    ats: ATSAnalysisResult
    skills: SkillRecommendationResult
