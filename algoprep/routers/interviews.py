from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from algoprep.deps import get_current_user, get_current_user_optional, get_db
from algoprep.schemas.interview import (
    CompleteRequest,
    InterviewCreateRequest,
    InterviewFeedbackOut,
    SolutionSubmitRequest,
)
from algoprep.services import review_dispatch
from algoprep.services.interview import interview_service as svc
from algoprep.services.interview.mock_problems import is_mock_interview_id

router = APIRouter(prefix="/api/interview", tags=["interview"])


def _require(user):
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


# 1) start an interview
@router.post("/create")
def create_interview(
    payload: InterviewCreateRequest,
    db: Session = Depends(get_db),
    user=Depends(get_current_user_optional),
):
    # the form is checked before the session
    if not payload.topics:
        raise HTTPException(status_code=400, detail="Please select at least one topic")
    if not payload.difficulty:
        raise HTTPException(status_code=400, detail="Please select a difficulty level")

    user = _require(user)
    return svc.create_interview(db, user["id"], payload)


# 2) load an interview; mock ids are rebuilt from their topics without a session
@router.get("/{interview_id}")
def get_interview(
    interview_id: str,
    db: Session = Depends(get_db),
    user=Depends(get_current_user_optional),
):
    if is_mock_interview_id(interview_id):
        return svc.regenerate_mock_interview(interview_id)

    user = _require(user)
    return svc.get_interview(db, user["id"], interview_id)


# 3) submit a solution; the review runs after the response
@router.post("/{interview_id}")
def submit_solution(
    interview_id: str,
    payload: SolutionSubmitRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    if is_mock_interview_id(interview_id):
        return {"success": True}

    sub = svc.submit_solution(db, user["id"], interview_id, payload)
    review_dispatch.enqueue_review(background_tasks, sub.id)

    return {
        "success": True,
        "submissionId": sub.id,
        "message": "Solution submitted successfully. Review will be processed in the background.",
    }


# 4) finish the interview and build the feedback report
@router.post("/{interview_id}/complete", response_model=InterviewFeedbackOut, response_model_exclude_none=True)
def complete_interview(
    interview_id: str,
    payload: CompleteRequest | None = None,
    db: Session = Depends(get_db),
    user=Depends(get_current_user_optional),
):
    if is_mock_interview_id(interview_id):
        return svc.complete_mock_interview(interview_id, payload or CompleteRequest())

    user = _require(user)
    return svc.complete_interview(db, user["id"], interview_id)


# 5) stored feedback of a completed interview
@router.get("/{interview_id}/feedback", response_model=InterviewFeedbackOut, response_model_exclude_none=True)
def get_feedback(
    interview_id: str,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    if is_mock_interview_id(interview_id):
        # mock feedback lives with the client
        raise HTTPException(status_code=404, detail="Interview not found")
    return svc.get_feedback(db, user["id"], interview_id)
