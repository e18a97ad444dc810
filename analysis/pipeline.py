import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from errors import InvalidInputError
from schemas import AnalysisReport, ATSAnalysisResult, ImprovementSuggestionsResult, SkillRecommendationResult
from parsers.documents import Extractor, extract_text
from .llm_groq import GroqClient
from .operations import (
    generate_improvement_suggestions,
    run_compatibility_and_match_analysis,
    run_skill_recommendation,
)

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """
    Sequences one user-triggered analysis: extract the resume text, then run
    the ATS analysis and the skill recommendation side by side.

    Both the LLM client and the extractor are passed in, so the pipeline can
    be driven by fakes in tests or by a different extraction backend.
    """

    def __init__(self, client: GroqClient, extractor: Optional[Extractor] = None):
        self.client = client
        self.extractor = extractor or extract_text

    def analyze(self, document: bytes, filename: str, job_description: str) -> AnalysisReport:
        if not job_description or not job_description.strip():
            raise InvalidInputError("job_description cannot be empty.")

        resume_text = self.extractor(document, filename)

        with ThreadPoolExecutor(max_workers=2) as executor:
            ats_future = executor.submit(self.compatibility, resume_text, job_description)
            skills_future = executor.submit(self.skills, job_description)
            ats_error = ats_future.exception()
            skills_error = skills_future.exception()

        if ats_error is not None:
            logger.error("ATS analysis failed for %s: %s", filename, ats_error)
        if skills_error is not None:
            logger.error("Skill recommendation failed for %s: %s", filename, skills_error)
        if ats_error is not None:
            raise ats_error
        if skills_error is not None:
            raise skills_error

        return AnalysisReport(ats=ats_future.result(), skills=skills_future.result())

    def compatibility(self, resume_text: str, job_description: str) -> ATSAnalysisResult:
        return run_compatibility_and_match_analysis(self.client, resume_text, job_description)

    def skills(self, job_description: str) -> SkillRecommendationResult:
        return run_skill_recommendation(self.client, job_description)

    def suggestions(self, resume_text: str, job_description: str) -> ImprovementSuggestionsResult:
        return generate_improvement_suggestions(self.client, resume_text, job_description)
