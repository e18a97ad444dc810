from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings
from errors import AnalyzerError, ExternalServiceError, ExtractionError, InvalidInputError, SchemaValidationError
from schemas import (
    AnalysisReport,
    AnalysisRequest,
    ATSAnalysisResult,
    ImprovementSuggestionsResult,
    SkillRecommendationResult,
    SkillRequest,
)
from analysis.llm_groq import GroqClient
from analysis.pipeline import AnalysisPipeline

settings = Settings.from_env()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidInputError: 400,
    ExtractionError: 422,
    SchemaValidationError: 502,
    ExternalServiceError: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the LLM client once and share it through app.state."""
    client = GroqClient.from_settings(settings)
    app.state.pipeline = AnalysisPipeline(client)
    logger.info("Using model %s at %s", settings.model_name, settings.groq_api_url)
    if not settings.groq_api_key:
        logger.warning("GROQ_API_KEY is not set; analysis requests will fail")
    yield
    client.session.close()
    logger.info("Application shutting down.")


app = FastAPI(title="Resume ATS Analyzer (Groq Cloud)", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_pipeline(request: Request) -> AnalysisPipeline:
    return request.app.state.pipeline


@app.exception_handler(AnalyzerError)
async def analyzer_error_handler(request: Request, exc: AnalyzerError):
    status = next((code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 500)
    logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc), "error": type(exc).__name__})


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
@app.get("/")
def root(pipeline: AnalysisPipeline = Depends(get_pipeline)):
    return {"status": "ok", "model": pipeline.client.model}


@app.post("/analyze", response_model=AnalysisReport)
async def analyze(
    resume: UploadFile = File(...),
    job_description: str = Form(...),
    pipeline: AnalysisPipeline = Depends(get_pipeline),
):
    """Extract the uploaded resume, then score it and recommend skills for the job."""
    data = await resume.read()
    return await run_in_threadpool(pipeline.analyze, data, resume.filename or "", job_description)


@app.post("/analyze/ats", response_model=ATSAnalysisResult)
def analyze_ats(req: AnalysisRequest, pipeline: AnalysisPipeline = Depends(get_pipeline)):
    return pipeline.compatibility(req.resume_text, req.job_description)


@app.post("/analyze/skills", response_model=SkillRecommendationResult)
def analyze_skills(req: SkillRequest, pipeline: AnalysisPipeline = Depends(get_pipeline)):
    return pipeline.skills(req.job_description)


@app.post("/analyze/suggestions", response_model=ImprovementSuggestionsResult)
def analyze_suggestions(req: AnalysisRequest, pipeline: AnalysisPipeline = Depends(get_pipeline)):
    return pipeline.suggestions(req.resume_text, req.job_description)
