import io
import docx
import fitz
import pytest

from analysis.prompts import ATS_SYSTEM_PROMPT, SKILLS_SYSTEM_PROMPT, SUGGESTIONS_SYSTEM_PROMPT

RESUME_TEXT = "5 years Python, AWS, Docker"
JOB_DESCRIPTION = "Looking for backend engineer with Python and cloud experience"

ATS_REPLY = {
    "ats_compatibility_score": 82,
    "match_score": 75,
    "improvement_suggestions": ["Add Docker details"],
}
SKILLS_REPLY = {"skills": ["Kubernetes"]}
SUGGESTIONS_REPLY = {"suggestions": ["Quantify the impact of your AWS work"]}


class FakeClient:
    """Deterministic stand-in for GroqClient, keyed on the system prompt."""

    model = "fake-model"

    def __init__(self, replies=None, errors=None):
        self.replies = {
            ATS_SYSTEM_PROMPT: ATS_REPLY,
            SKILLS_SYSTEM_PROMPT: SKILLS_REPLY,
            SUGGESTIONS_SYSTEM_PROMPT: SUGGESTIONS_REPLY,
        }
        self.replies.update(replies or {})
        self.errors = errors or {}
        self.calls = []

    def complete_json(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if system_prompt in self.errors:
            raise self.errors[system_prompt]
        return dict(self.replies[system_prompt])


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def pdf_bytes():
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), RESUME_TEXT)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def blank_pdf_bytes():
    doc = fitz.open()
    doc.new_page()
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes():
    document = docx.Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph(RESUME_TEXT)
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Certifications"
    table.cell(0, 1).text = "AWS Solutions Architect"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()
