import pytest
from fastapi.testclient import TestClient

from app import app, get_pipeline
from analysis.pipeline import AnalysisPipeline
from analysis.prompts import ATS_SYSTEM_PROMPT, SKILLS_SYSTEM_PROMPT
from errors import ExternalServiceError, SchemaValidationError
from conftest import FakeClient, JOB_DESCRIPTION, RESUME_TEXT


@pytest.fixture
def use_client():
    """Route requests through a pipeline backed by the given fake LLM client."""

    def _use(client):
        app.dependency_overrides[get_pipeline] = lambda: AnalysisPipeline(client)
        return TestClient(app)

    yield _use
    app.dependency_overrides.clear()


def upload(http, filename="resume.txt", content=RESUME_TEXT.encode(), jd=JOB_DESCRIPTION):
    return http.post(
        "/analyze",
        files={"resume": (filename, content, "text/plain")},
        data={"job_description": jd},
    )


def test_root_reports_model(use_client):
    r = use_client(FakeClient()).get("/")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "model": "fake-model"}


def test_analyze_upload(use_client):
    r = upload(use_client(FakeClient()))
    assert r.status_code == 200
    assert r.json() == {
        "ats": {"compatibility_score": 82.0, "match_score": 75.0, "suggestions": ["Add Docker details"]},
        "skills": {"skills": ["Kubernetes"]},
    }


def test_analyze_unsupported_file(use_client):
    r = upload(use_client(FakeClient()), filename="resume.odt")
    assert r.status_code == 422
    assert r.json()["error"] == "ExtractionError"


def test_analyze_blank_job_description(use_client):
    r = upload(use_client(FakeClient()), jd="   ")
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidInputError"


def test_internal_value_error_is_not_a_client_error():
    def buggy_extractor(data, filename):
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    app.dependency_overrides[get_pipeline] = lambda: AnalysisPipeline(FakeClient(), buggy_extractor)
    try:
        r = upload(TestClient(app, raise_server_exceptions=False))
    finally:
        app.dependency_overrides.clear()
    assert r.status_code == 500


def test_analyze_requires_job_description(use_client):
    r = use_client(FakeClient()).post(
        "/analyze", files={"resume": ("resume.txt", RESUME_TEXT.encode(), "text/plain")}
    )
    assert r.status_code == 422


def test_service_failure_maps_to_503(use_client):
    client = FakeClient(errors={ATS_SYSTEM_PROMPT: ExternalServiceError("Groq API unreachable")})
    r = upload(use_client(client))
    assert r.status_code == 503
    assert r.json() == {"detail": "Groq API unreachable", "error": "ExternalServiceError"}


def test_schema_failure_maps_to_502(use_client):
    client = FakeClient(errors={SKILLS_SYSTEM_PROMPT: SchemaValidationError("bad shape")})
    r = upload(use_client(client))
    assert r.status_code == 502
    assert r.json()["error"] == "SchemaValidationError"


def test_ats_route(use_client):
    r = use_client(FakeClient()).post(
        "/analyze/ats", json={"resume_text": RESUME_TEXT, "job_description": JOB_DESCRIPTION}
    )
    assert r.status_code == 200
    assert r.json()["compatibility_score"] == 82.0


def test_ats_route_rejects_blank_resume(use_client):
    r = use_client(FakeClient()).post(
        "/analyze/ats", json={"resume_text": "  ", "job_description": JOB_DESCRIPTION}
    )
    assert r.status_code == 422


def test_skills_route(use_client):
    r = use_client(FakeClient()).post("/analyze/skills", json={"job_description": JOB_DESCRIPTION})
    assert r.status_code == 200
    assert r.json() == {"skills": ["Kubernetes"]}


def test_suggestions_route(use_client):
    r = use_client(FakeClient()).post(
        "/analyze/suggestions", json={"resume_text": RESUME_TEXT, "job_description": JOB_DESCRIPTION}
    )
    assert r.status_code == 200
    assert r.json() == {"suggestions": ["Quantify the impact of your AWS work"]}
