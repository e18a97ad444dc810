# ui/dashboard.py
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import streamlit as st
import pandas as pd
from config import Settings
from ui.analysis_client import run_analysis

# -------------------- CONFIG --------------------
API_URL = Settings.from_env().api_url
st.set_page_config(page_title="Resume ATS Analyzer", page_icon="🧠", layout="centered")
st.title("🤖 Resume ATS Analyzer")

st.markdown(
    "Upload your resume and paste a job description to get an ATS compatibility score, "
    "a match score, improvement suggestions and skills worth picking up."
)

# -------------------- SESSION STATE --------------------
if "api_url" not in st.session_state:
    st.session_state.api_url = API_URL

# True while a request is in flight; keeps the Analyze button disabled
if "analysis_running" not in st.session_state:
    st.session_state.analysis_running = False

# Set by the button callback, consumed by the run that sends the request
if "analysis_pending" not in st.session_state:
    st.session_state.analysis_pending = False

# Persist the last report and error message so they survive reruns
if "last_report" not in st.session_state:
    st.session_state.last_report = None
if "last_error" not in st.session_state:
    st.session_state.last_error = None


def _start_analysis():
    st.session_state.analysis_running = True
    st.session_state.analysis_pending = True


# -------------------- FORM --------------------
with st.form("analyze_form", clear_on_submit=False):
    resume_file = st.file_uploader("Upload Resume (PDF, DOCX, or TXT)", type=["pdf", "docx", "txt"])
    job_description = st.text_area("Job Description", placeholder="Enter job description here", height=200)
    st.form_submit_button(
        "Analyze",
        disabled=st.session_state.analysis_running,
        on_click=_start_analysis,
    )

if st.session_state.analysis_pending:
    st.session_state.analysis_pending = False
    with st.spinner("⏳ Analyzing..."):
        run_analysis(st.session_state, st.session_state.api_url, resume_file, job_description)
    # Redraw with the button enabled again
    st.rerun()

if st.session_state.last_error:
    st.error(f"❌ {st.session_state.last_error}")

# -------------------- RESULTS --------------------
report = st.session_state.get("last_report")
if report:
    ats = report["ats"]
    with st.container(border=True):
        st.markdown("### 📊 Scores")
        st.table(pd.DataFrame({
            "Metric": ["ATS Compatibility Score", "Resume ↔ Job Description Match Score"],
            "Score (%)": [f"{ats['compatibility_score']:.0f}", f"{ats['match_score']:.0f}"],
        }))

    if ats["suggestions"]:
        with st.container(border=True):
            st.markdown("### 📝 Resume Improvement Suggestions")
            for s in ats["suggestions"]:
                st.markdown(f"- {s}")

    skills = report["skills"]["skills"]
    if skills:
        with st.container(border=True):
            st.markdown("### 🧠 Skill Recommendations")
            for skill in skills:
                st.markdown(f"- {skill}")
