"""
Resume builder
- profile: the user's master resume data
- resumes: per-job copies of the profile, tailored by an LLM analysis
- follow-up answers, cover letters, deletion
"""
import copy
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from openai import APIStatusError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from algoprep.models.resume import CoverLetter, Resume, ResumeProfile, ResumeVersion
from algoprep.schemas.resume import CoverLetterCustomizations, ResumeAnalysis
from algoprep.services import llm_client

logger = logging.getLogger(__name__)

REQUIRED_PROFILE_KEYS = ("personalInfo", "experience", "education", "technicalSkills")

DEFAULT_PROFILE: Dict[str, Any] = {
    "personalInfo": {
        "name": "Your Name",
        "title": "Software Engineer",
        "contact": {
            "email": "you@example.com",
            "phone": "+1 555 0100",
            "socialLinks": {"linkedin": True, "github": True},
        },
    },
    "summary": "Software engineer with experience building and shipping web applications.",
    "technicalSkills": {
        "programming": ["Python", "TypeScript", "SQL"],
        "frontend": ["React", "Next.js", "Tailwind"],
        "backend": ["FastAPI", "PostgreSQL"],
        "devopsAndTools": ["Docker", "Git", "CI/CD"],
        "cloudAndTesting": ["AWS", "pytest"],
    },
    "education": [
        {"institution": "Your University", "degree": "B.Sc. Computer Science", "year": "2016 - 2020"},
    ],
    "achievements": [
        "Describe a measurable achievement here",
    ],
    "experience": [
        {
            "company": "Company Name",
            "position": "Software Engineer",
            "duration": "2020 - Present",
            "technologies": ["Python", "React"],
            "responsibilities": [
                "Built features used by thousands of customers",
                "Improved page load time by 30%",
                "Mentored junior developers and reviewed code",
            ],
        },
    ],
}

FALLBACK_QUESTIONS: List[Dict[str, Any]] = [
    {
        "id": "relevantProjects",
        "type": "textarea",
        "label": "Relevant Projects",
        "description": "Please describe any projects that are relevant to this role",
        "placeholder": "Describe your projects...",
        "required": True,
    }
]
FALLBACK_SUGGESTIONS = ["Add more details about your technical projects"]

ANALYZE_SYSTEM = "You are an expert resume tailoring assistant that provides responses in JSON format."


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


# ----------------------------
# profile
# ----------------------------
def get_profile(db: Session, user_id: str) -> Optional[ResumeProfile]:
    return db.query(ResumeProfile).filter(ResumeProfile.user_id == user_id).first()


def save_profile(db: Session, user_id: str, profile_data: Dict[str, Any]) -> ResumeProfile:
    missing = [k for k in REQUIRED_PROFILE_KEYS if not profile_data.get(k)]
    if missing:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Invalid profile data structure. Please make sure all required fields are present.",
                "details": missing,
            },
        )

    profile = get_profile(db, user_id)
    if profile is None:
        profile = ResumeProfile(user_id=user_id, profile_data=profile_data)
        db.add(profile)
    else:
        profile.profile_data = profile_data
        profile.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(profile)
    logger.info("[RESUME_PROFILE] saved user=%s", user_id)
    return profile


def save_default_profile(db: Session, user_id: str) -> ResumeProfile:
    return save_profile(db, user_id, copy.deepcopy(DEFAULT_PROFILE))


# ----------------------------
# resumes
# ----------------------------
def list_resumes(db: Session, user_id: str) -> List[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc())
        .all()
    )


def get_owned_resume(db: Session, user_id: str, resume_id: str, detail: str = "Resume not found") -> Resume:
    resume = (
        db.query(Resume)
        .filter(Resume.id == resume_id, Resume.user_id == user_id)
        .first()
    )
    if not resume:
        raise HTTPException(status_code=404, detail=detail)
    return resume


def _snapshot(db: Session, resume: Resume) -> None:
    db.add(ResumeVersion(resume_id=resume.id, content=copy.deepcopy(resume.content)))


def create_resume(
    db: Session,
    user_id: str,
    title: Optional[str],
    company_name: Optional[str],
    job_description: Optional[str],
) -> Dict[str, Any]:
    if not title or not company_name or not job_description:
        raise HTTPException(status_code=400, detail="All fields are required")

    profile = get_profile(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Resume profile not found. Please set up your profile first.")

    resume = Resume(
        user_id=user_id,
        profile_id=profile.id,
        title=title,
        company_name=company_name,
        job_description=job_description,
        content=copy.deepcopy(profile.profile_data),
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    logger.info("[RESUME_CREATE] id=%s user=%s", resume.id, user_id)

    result: Dict[str, Any] = {"success": True, "resumeId": resume.id}
    try:
        analysis = analyze_resume(db, user_id, resume.id, profile.profile_data, job_description)
    except HTTPException as e:
        # the resume exists; the user can re-run the analysis later
        logger.warning("[RESUME_CREATE] analysis failed for %s: %s", resume.id, e.detail)
        result["error"] = "Analysis failed. Please try analyzing again later."
        return result

    result["needsMoreInfo"] = analysis["needsMoreInfo"]
    result["questions"] = analysis["questions"]
    return result


def _analysis_messages(profile_data: Dict[str, Any], job_description: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": ANALYZE_SYSTEM},
        {
            "role": "user",
            "content": f"""
Analyze this job description and candidate profile to create a tailored resume.
Provide your response in this exact JSON format:
{{
  "tailoredContent": {{
    // Modified version of the profile data
  }},
  "missingInformation": [
    {{
      "id": string,
      "type": "text" | "textarea",
      "label": string,
      "description": string,
      "placeholder": string,
      "required": boolean
    }}
  ],
  "suggestions": string[]
}}

Job Description:
{job_description}

Candidate Profile:
{json.dumps(profile_data, indent=2, ensure_ascii=False)}

Focus on:
1. Tailoring the content to match job requirements
2. Identifying missing skills or experiences
3. Suggesting improvements and highlights
""",
        },
    ]


def analyze_resume(
    db: Session,
    user_id: str,
    resume_id: Optional[str],
    profile_data: Optional[Dict[str, Any]],
    job_description: Optional[str],
) -> Dict[str, Any]:
    """
    Tailor the resume to the job with the LLM and store the result.
    Upstream errors are a 503; unusable answers fall back to a canned follow-up question.
    """
    if not resume_id or not profile_data or not job_description:
        raise HTTPException(status_code=400, detail="Missing required fields")

    resume = get_owned_resume(db, user_id, resume_id, detail="Resume not found or access denied")

    try:
        raw = llm_client.complete_json(
            _analysis_messages(profile_data, job_description),
            temperature=0.7,
            max_tokens=2000,
        )
        analysis = ResumeAnalysis.model_validate(raw)
        questions = [q.model_dump() for q in analysis.missingInformation]
        suggestions = analysis.suggestions
        tailored = analysis.tailoredContent
    except APIStatusError as e:
        logger.error("[RESUME_ANALYZE] LLM returned %s: %s", e.status_code, e.message)
        raise HTTPException(status_code=503, detail="AI service unavailable")
    except (ValidationError, llm_client.LLMResponseError) as e:
        logger.error("[RESUME_ANALYZE] unusable analysis, using fallback: %s", e)
        questions, suggestions, tailored = copy.deepcopy(FALLBACK_QUESTIONS), list(FALLBACK_SUGGESTIONS), profile_data
    except Exception as e:
        # connection errors, missing API key
        logger.error("[RESUME_ANALYZE] AI processing error, using fallback: %r", e)
        questions, suggestions, tailored = copy.deepcopy(FALLBACK_QUESTIONS), list(FALLBACK_SUGGESTIONS), profile_data

    needs_more_info = len(questions) > 0

    _snapshot(db, resume)
    resume.content = {
        **profile_data,
        "aiAnalysis": {
            "suggestions": suggestions,
            "needsMoreInfo": needs_more_info,
            "questions": questions,
        },
        "tailoredContent": tailored,
        "lastUpdated": _now_iso(),
    }
    db.commit()
    logger.info("[RESUME_ANALYZE] resume=%s questions=%d", resume.id, len(questions))

    return {"success": True, "needsMoreInfo": needs_more_info, "questions": questions}


def update_responses(
    db: Session,
    user_id: str,
    resume_id: Optional[str],
    responses: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    if not resume_id or responses is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    resume = get_owned_resume(db, user_id, resume_id)
    _snapshot(db, resume)
    resume.content = {**(resume.content or {}), "additionalInfo": responses, "lastUpdated": _now_iso()}
    db.commit()
    return {"success": True}


# ----------------------------
# cover letter
# ----------------------------
def _first_skills(skills: Any, n: int = 3) -> List[str]:
    if isinstance(skills, dict):
        flat = [s for group in skills.values() if isinstance(group, list) for s in group]
    elif isinstance(skills, list):
        flat = list(skills)
    else:
        flat = []
    return [str(s) for s in flat[:n]]


def _lower_first(text: str) -> str:
    return text[:1].lower() + text[1:] if text else text


def render_cover_letter(
    content: Dict[str, Any],
    company_name: str,
    job_description: str,
    customizations: Optional[CoverLetterCustomizations] = None,
) -> str:
    custom = customizations or CoverLetterCustomizations()
    info = content.get("personalInfo") or {}
    contact = info.get("contact") or {}
    position = info.get("title") or "open"
    experience = content.get("experience") or []
    latest = experience[0] if experience else {}
    duties = latest.get("responsibilities") or []
    achievements = content.get("achievements") or []

    intro = custom.introduction
    if not intro:
        intro = "Throughout my career, I have focused on delivering high-quality, user-centric solutions."
        if latest.get("company") and duties:
            intro += f" At my role at {latest['company']}, I {_lower_first(duties[0])}."

    body = custom.body
    if not body:
        skills = ", ".join(_first_skills(content.get("technicalSkills")))
        snippet = job_description[:100]
        body = (
            f"I am particularly drawn to this opportunity because it aligns with my expertise in {skills}. "
            f"Your job description emphasizes the need for someone who can {snippet}... "
            "This resonates with my experience and passion for building robust solutions."
        )

    highlights = [h for h in (achievements[:1] + duties[2:3]) if h]
    highlight_block = ""
    if highlights:
        highlight_block = "Some key achievements that demonstrate my qualifications:\n" + "\n".join(
            f"- {h}" for h in highlights
        ) + "\n\n"

    closing = custom.closing or (
        "I am excited about the possibility of joining your team and contributing to your company's success. "
        "I would welcome the opportunity to discuss how my skills and experience align with your needs in more detail."
    )

    signature = "\n".join(
        s for s in (info.get("name"), contact.get("email"), contact.get("phone")) if s
    )

    return (
        "Dear Hiring Manager,\n\n"
        f"I am writing to express my strong interest in the {position} position at {company_name}. "
        "I am excited about the opportunity to contribute to your team.\n\n"
        f"{intro}\n\n"
        f"{body}\n\n"
        f"{highlight_block}"
        f"{closing}\n\n"
        f"Best regards,\n{signature}"
    ).strip()


def create_cover_letter(
    db: Session,
    user_id: str,
    resume_id: Optional[str],
    company_name: Optional[str],
    job_description: Optional[str],
    customizations: Optional[CoverLetterCustomizations] = None,
) -> CoverLetter:
    if not resume_id or not company_name or not job_description:
        raise HTTPException(status_code=400, detail="Missing required fields")

    resume = get_owned_resume(db, user_id, resume_id)
    letter = CoverLetter(
        resume_id=resume.id,
        content=render_cover_letter(resume.content or {}, company_name, job_description, customizations),
    )
    db.add(letter)
    db.commit()
    db.refresh(letter)
    logger.info("[COVER_LETTER] resume=%s letter=%s", resume.id, letter.id)
    return letter


# ----------------------------
# delete
# ----------------------------
def delete_resume(db: Session, user_id: str, resume_id: str) -> None:
    resume = get_owned_resume(db, user_id, resume_id)

    # cover letters, then versions, then the resume itself
    db.query(CoverLetter).filter(CoverLetter.resume_id == resume.id).delete(synchronize_session=False)
    db.query(ResumeVersion).filter(ResumeVersion.resume_id == resume.id).delete(synchronize_session=False)
    db.expire(resume, ["cover_letters"])
    db.delete(resume)
    db.commit()
    logger.info("[RESUME_DELETE] id=%s user=%s", resume_id, user_id)
