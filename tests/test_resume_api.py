import copy

import httpx
import openai
import pytest

from algoprep.models import CoverLetter, Resume, ResumeVersion
from algoprep.services import llm_client
from algoprep.services.resume_service import DEFAULT_PROFILE

from conftest import FakeLLM

JOB = "We need a backend engineer who can design APIs in Python and scale PostgreSQL."

ANALYSIS = {
    "tailoredContent": {"summary": "Backend engineer focused on Python APIs."},
    "missingInformation": [
        {
            "id": "postgresScale",
            "type": "textarea",
            "label": "PostgreSQL at scale",
            "description": "Describe the largest database you ran",
            "placeholder": "Rows, QPS, ...",
            "required": True,
        }
    ],
    "suggestions": ["Lead with API design work"],
}


@pytest.fixture
def llm(monkeypatch):
    fake = FakeLLM(resume_answer=copy.deepcopy(ANALYSIS))
    monkeypatch.setattr(llm_client, "complete_json", fake)
    return fake


@pytest.fixture
def profile(client, auth_headers):
    res = client.post("/api/resume/profile/default", headers=auth_headers)
    assert res.status_code == 200
    return res.json()


@pytest.fixture
def resume_id(client, auth_headers, profile, llm):
    res = client.post(
        "/api/resume",
        json={"title": "Backend @ Acme", "companyName": "Acme", "jobDescription": JOB},
        headers=auth_headers,
    )
    assert res.status_code == 200
    return res.json()["resumeId"]


def _status_error(status=500):
    request = httpx.Request("POST", "https://api.deepseek.com/chat/completions")
    return openai.APIStatusError("upstream error", response=httpx.Response(status, request=request), body=None)


# ----------------------------
# profile
# ----------------------------
def test_profile_requires_login(client):
    assert client.get("/api/resume/profile").status_code == 401


def test_profile_missing_keys(client, auth_headers):
    res = client.put("/api/resume/profile", json={"personalInfo": {"name": "A"}}, headers=auth_headers)
    assert res.status_code == 400
    body = res.json()
    assert body["error"].startswith("Invalid profile data structure.")
    assert body["details"] == ["experience", "education", "technicalSkills"]


def test_profile_roundtrip(client, auth_headers):
    data = copy.deepcopy(DEFAULT_PROFILE)
    data["personalInfo"]["name"] = "Sam Lee"
    assert client.put("/api/resume/profile", json=data, headers=auth_headers).status_code == 200

    res = client.get("/api/resume/profile", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["profileData"]["personalInfo"]["name"] == "Sam Lee"


def test_default_profile(client, auth_headers, profile):
    res = client.get("/api/resume/profile", headers=auth_headers)
    assert res.json()["profileData"] == DEFAULT_PROFILE


# ----------------------------
# create / analyze
# ----------------------------
def test_create_without_profile(client, auth_headers, llm):
    res = client.post(
        "/api/resume",
        json={"title": "t", "companyName": "c", "jobDescription": "j"},
        headers=auth_headers,
    )
    assert res.status_code == 404
    assert res.json()["error"] == "Resume profile not found. Please set up your profile first."


def test_create_missing_fields(client, auth_headers, profile):
    res = client.post("/api/resume", json={"title": "t"}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "All fields are required"}


def test_create_runs_analysis(client, db, auth_headers, profile, llm):
    res = client.post(
        "/api/resume",
        json={"title": "Backend @ Acme", "companyName": "Acme", "jobDescription": JOB},
        headers=auth_headers,
    )
    body = res.json()
    assert body["success"] is True
    assert body["needsMoreInfo"] is True
    assert [q["id"] for q in body["questions"]] == ["postgresScale"]

    call = llm.calls[0]
    assert (call["temperature"], call["max_tokens"]) == (0.7, 2000)
    assert JOB in call["messages"][1]["content"]

    resume = db.get(Resume, body["resumeId"])
    assert resume.company_name == "Acme"
    assert resume.content["tailoredContent"] == ANALYSIS["tailoredContent"]
    assert resume.content["aiAnalysis"]["suggestions"] == ["Lead with API design work"]
    # the profile copy taken before the analysis
    versions = db.query(ResumeVersion).filter(ResumeVersion.resume_id == resume.id).all()
    assert len(versions) == 1
    assert versions[0].content == DEFAULT_PROFILE


def test_create_keeps_resume_when_ai_is_down(client, db, auth_headers, profile, monkeypatch):
    monkeypatch.setattr(llm_client, "complete_json", FakeLLM(error=_status_error(502)))
    res = client.post(
        "/api/resume",
        json={"title": "t", "companyName": "c", "jobDescription": JOB},
        headers=auth_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["error"] == "Analysis failed. Please try analyzing again later."
    assert db.get(Resume, body["resumeId"]) is not None


def test_analyze_upstream_status_error(client, auth_headers, resume_id, monkeypatch):
    monkeypatch.setattr(llm_client, "complete_json", FakeLLM(error=_status_error()))
    res = client.post(
        "/api/resume/analyze",
        json={"resumeId": resume_id, "profileData": DEFAULT_PROFILE, "jobDescription": JOB},
        headers=auth_headers,
    )
    assert res.status_code == 503
    assert res.json() == {"error": "AI service unavailable"}


def test_analyze_unusable_output_falls_back(client, db, auth_headers, resume_id, monkeypatch):
    monkeypatch.setattr(llm_client, "complete_json", FakeLLM(resume_answer={"tailoredContent": "nope"}))
    res = client.post(
        "/api/resume/analyze",
        json={"resumeId": resume_id, "profileData": DEFAULT_PROFILE, "jobDescription": JOB},
        headers=auth_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["needsMoreInfo"] is True
    assert [q["id"] for q in body["questions"]] == ["relevantProjects"]

    db.expire_all()
    resume = db.get(Resume, resume_id)
    assert resume.content["tailoredContent"] == DEFAULT_PROFILE
    assert resume.content["aiAnalysis"]["suggestions"] == ["Add more details about your technical projects"]
    assert db.query(ResumeVersion).filter(ResumeVersion.resume_id == resume_id).count() == 2


def test_analyze_missing_fields(client, auth_headers, resume_id):
    res = client.post("/api/resume/analyze", json={"resumeId": resume_id}, headers=auth_headers)
    assert res.status_code == 400


def test_analyze_someone_elses_resume(client, other_headers, resume_id, llm):
    res = client.post(
        "/api/resume/analyze",
        json={"resumeId": resume_id, "profileData": DEFAULT_PROFILE, "jobDescription": JOB},
        headers=other_headers,
    )
    assert res.status_code == 404
    assert res.json()["error"] == "Resume not found or access denied"


# ----------------------------
# read
# ----------------------------
def test_list_and_get(client, auth_headers, other_headers, resume_id):
    listed = client.get("/api/resume", headers=auth_headers).json()
    assert [r["id"] for r in listed] == [resume_id]
    assert client.get("/api/resume", headers=other_headers).json() == []

    res = client.get(f"/api/resume/{resume_id}", headers=auth_headers)
    assert res.json()["title"] == "Backend @ Acme"
    assert client.get(f"/api/resume/{resume_id}", headers=other_headers).status_code == 404


# ----------------------------
# follow-ups / cover letter
# ----------------------------
def test_update_responses(client, db, auth_headers, resume_id):
    answers = {"postgresScale": "2TB, 5k QPS"}
    res = client.post(
        "/api/resume/update-responses",
        json={"resumeId": resume_id, "responses": answers},
        headers=auth_headers,
    )
    assert res.json() == {"success": True}

    db.expire_all()
    resume = db.get(Resume, resume_id)
    assert resume.content["additionalInfo"] == answers
    assert "aiAnalysis" in resume.content


def test_cover_letter(client, db, auth_headers, resume_id):
    res = client.post(
        "/api/resume/cover-letter",
        json={"resumeId": resume_id, "companyName": "Acme", "jobDescription": JOB},
        headers=auth_headers,
    )
    assert res.status_code == 200
    letter = res.json()["coverLetter"]
    content = letter["content"]

    assert content.startswith("Dear Hiring Manager,")
    assert "Software Engineer position at Acme" in content
    assert "expertise in Python, TypeScript, SQL" in content
    assert "- Describe a measurable achievement here" in content
    assert content.endswith("Your Name\nyou@example.com\n+1 555 0100")
    assert db.query(CoverLetter).filter(CoverLetter.resume_id == resume_id).count() == 1


def test_cover_letter_customizations(client, auth_headers, resume_id):
    res = client.post(
        "/api/resume/cover-letter",
        json={
            "resumeId": resume_id,
            "companyName": "Acme",
            "jobDescription": JOB,
            "customizations": {"introduction": "Hello Acme.", "closing": "Thanks!"},
        },
        headers=auth_headers,
    )
    content = res.json()["coverLetter"]["content"]
    assert "\n\nHello Acme.\n\n" in content
    assert "\n\nThanks!\n\n" in content


# ----------------------------
# pdf / delete
# ----------------------------
def test_download_pdf(client, auth_headers, resume_id):
    res = client.get("/api/resume/download", params={"id": resume_id}, headers=auth_headers)
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert 'filename="backend___acme_resume.pdf"' in res.headers["content-disposition"]
    assert res.content.startswith(b"%PDF")


def test_download_without_id(client, auth_headers):
    res = client.get("/api/resume/download", headers=auth_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Resume ID is required"}


def test_delete_resume_and_children(client, db, auth_headers, other_headers, resume_id):
    client.post(
        "/api/resume/cover-letter",
        json={"resumeId": resume_id, "companyName": "Acme", "jobDescription": JOB},
        headers=auth_headers,
    )

    assert client.delete(f"/api/resume/{resume_id}", headers=other_headers).status_code == 404

    res = client.delete(f"/api/resume/{resume_id}", headers=auth_headers)
    assert res.json() == {"success": True}
    assert client.get(f"/api/resume/{resume_id}", headers=auth_headers).status_code == 404
    assert db.query(CoverLetter).count() == 0
    assert db.query(ResumeVersion).count() == 0
