import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from algoprep.deps import get_current_user, get_db
from algoprep.schemas.resume import (
    AnalyzeRequest,
    CoverLetterOut,
    CoverLetterRequest,
    ResumeCreateRequest,
    ResumeOut,
    UpdateResponsesRequest,
)
from algoprep.services import resume_service
from algoprep.services.resume_pdf import render_resume_pdf, resume_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resume", tags=["resume"])


# ----------------------------
# profile
# ----------------------------
@router.get("/profile")
def get_profile(db: Session = Depends(get_db), current=Depends(get_current_user)):
    profile = resume_service.get_profile(db, current["id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Resume profile not found")
    return {"id": profile.id, "profileData": profile.profile_data, "updatedAt": profile.updated_at}


@router.put("/profile")
def save_profile(
    profile_data: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current=Depends(get_current_user),
):
    profile = resume_service.save_profile(db, current["id"], profile_data)
    return {"success": True, "id": profile.id}


@router.post("/profile/default")
def save_default_profile(db: Session = Depends(get_db), current=Depends(get_current_user)):
    profile = resume_service.save_default_profile(db, current["id"])
    return {"success": True, "id": profile.id}


# ----------------------------
# tailoring
# ----------------------------
@router.post("/analyze")
def analyze(payload: AnalyzeRequest, db: Session = Depends(get_db), current=Depends(get_current_user)):
    return resume_service.analyze_resume(
        db, current["id"], payload.resume_id, payload.profile_data, payload.job_description
    )


@router.post("/cover-letter")
def cover_letter(payload: CoverLetterRequest, db: Session = Depends(get_db), current=Depends(get_current_user)):
    letter = resume_service.create_cover_letter(
        db,
        current["id"],
        payload.resume_id,
        payload.company_name,
        payload.job_description,
        payload.customizations,
    )
    return {"success": True, "coverLetter": CoverLetterOut.model_validate(letter).model_dump(mode="json")}


@router.post("/update-responses")
def update_responses(
    payload: UpdateResponsesRequest,
    db: Session = Depends(get_db),
    current=Depends(get_current_user),
):
    return resume_service.update_responses(db, current["id"], payload.resume_id, payload.responses)


@router.get("/download")
def download(
    id: str | None = Query(None),
    db: Session = Depends(get_db),
    current=Depends(get_current_user),
):
    if not id:
        raise HTTPException(status_code=400, detail="Resume ID is required")
    resume = resume_service.get_owned_resume(db, current["id"], id)

    try:
        pdf = render_resume_pdf(resume.title, resume.content or {})
    except Exception as e:
        logger.error("[RESUME_PDF] render failed for %s: %r", resume.id, e)
        raise HTTPException(status_code=500, detail="Failed to generate PDF")

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{resume_filename(resume.title)}"'},
    )


# ----------------------------
# resumes
# ----------------------------
@router.get("", response_model=List[ResumeOut])
def list_resumes(db: Session = Depends(get_db), current=Depends(get_current_user)):
    return resume_service.list_resumes(db, current["id"])


@router.post("")
def create_resume(payload: ResumeCreateRequest, db: Session = Depends(get_db), current=Depends(get_current_user)):
    return resume_service.create_resume(
        db, current["id"], payload.title, payload.company_name, payload.job_description
    )


@router.get("/{resume_id}", response_model=ResumeOut)
def get_resume(resume_id: str, db: Session = Depends(get_db), current=Depends(get_current_user)):
    return resume_service.get_owned_resume(db, current["id"], resume_id)


@router.delete("/{resume_id}")
def delete_resume(resume_id: str, db: Session = Depends(get_db), current=Depends(get_current_user)):
    resume_service.delete_resume(db, current["id"], resume_id)
    return {"success": True}
