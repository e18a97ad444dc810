# ui/analysis_client.py
import requests


def _error_detail(r: requests.Response) -> str:
    try:
        return r.json().get("detail", r.text)
    except ValueError:
        return r.text


def run_analysis(state, api_url: str, resume_file, job_description: str, timeout: float = 180) -> None:
    """
    Post one analysis to the API and record the outcome in `state`.

    `state` is st.session_state (or any mapping). analysis_running stays True
    for the whole request and is always cleared on the way out.
    """
    state["analysis_running"] = True
    state["last_error"] = None
    state["last_report"] = None
    try:
        if not resume_file:
            state["last_error"] = "Please upload a resume."
            return
        if not job_description or not job_description.strip():
            state["last_error"] = "Please enter a job description."
            return

        files = {"resume": (resume_file.name, resume_file.getvalue(), resume_file.type)}
        try:
            r = requests.post(
                f"{api_url}/analyze",
                files=files,
                data={"job_description": job_description},
                timeout=timeout,
            )
        except requests.exceptions.RequestException as e:
            state["last_error"] = f"Analysis failed. Please try again. {e}"
            return

        if r.status_code == 200:
            state["last_report"] = r.json()
        else:
            state["last_error"] = f"Analysis failed. Please try again. {_error_detail(r)}"
    finally:
        state["analysis_running"] = False
