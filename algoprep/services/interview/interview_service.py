"""
Interview business logic
- create: match problems, pad with mock problems, persist real interviews
- fetch: stored interviews, regenerated mock interviews
- submit: upsert a pending submission
- complete: synthesize feedback and close the interview
"""
import logging
import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from algoprep.models.interview import Interview
from algoprep.models.problem import Problem
from algoprep.models.submission import Submission
from algoprep.models.topic import Topic
from algoprep.schemas.interview import CompleteRequest, InterviewCreateRequest, SolutionSubmitRequest
from algoprep.services import feedback_service
from algoprep.services.feedback_service import SubmissionView
from algoprep.services.interview import matcher, mock_problems

logger = logging.getLogger(__name__)

MOCK_DEFAULT_DURATION = 30


def _iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")


def _question(problem: matcher.Candidate) -> Dict[str, str]:
    return {
        "id": problem.id,
        "title": problem.title,
        "description": problem.description,
        "difficulty": problem.difficulty,
        "template": mock_problems.default_template(problem.title),
    }


def load_candidates(db: Session) -> List[matcher.Candidate]:
    """All problems with their tag ids, newest first."""
    rows = db.query(Problem).order_by(Problem.created_at.desc()).all()
    return [
        matcher.Candidate(
            id=p.id,
            title=p.title,
            description=p.description,
            difficulty=p.difficulty,
            topic_ids=frozenset(t.id for t in p.topics),
            pattern_ids=frozenset(pt.id for pt in p.patterns),
        )
        for p in rows
    ]


def _owned_interview(db: Session, user_id: str, interview_id: str) -> Interview:
    interview = (
        db.query(Interview)
        .filter(Interview.id == interview_id, Interview.user_id == user_id)
        .first()
    )
    if not interview:
        raise HTTPException(status_code=404, detail="Interview not found")
    return interview


# ----------------------------
# create
# ----------------------------
def create_interview(
    db: Session,
    user_id: str,
    req: InterviewCreateRequest,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    topics = list(req.topics or [])
    difficulty = req.difficulty

    try:
        topic_names = {t.id: t.name for t in db.query(Topic).all()}
    except SQLAlchemyError as e:
        logger.error("[INTERVIEW_CREATE] topics fetch failed: %r", e)
        raise HTTPException(status_code=500, detail="Failed to fetch topics. Please try again.")

    try:
        store = load_candidates(db)
    except SQLAlchemyError as e:
        logger.error("[INTERVIEW_CREATE] problems fetch failed: %r", e)
        raise HTTPException(status_code=500, detail="Failed to fetch problems from database. Please try again.")

    logger.info("[INTERVIEW_CREATE] topics=%s difficulty=%s store=%d", topics, difficulty, len(store))

    if not store:
        raise HTTPException(status_code=404, detail="No problems found in the database. Please contact support.")

    pool = matcher.match_problems(matcher.MatchRequest(difficulty, frozenset(topics)), store)
    if not pool:
        labels = ", ".join(mock_problems.topic_label(t, topic_names) for t in topics)
        raise HTTPException(
            status_code=404,
            detail=f"No problems found for the selected topics: {labels}. "
                   "Please select different topics or contact support.",
        )

    selected = matcher.select_problems(pool, rng)
    questions = [_question(p) for p in selected]
    start_time = datetime.now(timezone.utc)

    is_mock = len(questions) < mock_problems.FULL_SET
    interview_id = None

    if not is_mock:
        interview = Interview(
            user_id=user_id,
            duration=req.duration,
            difficulty=difficulty,
            topics=topics,
            company_type=req.company_type,
            target_companies=req.target_companies or [],
            problems=[q["id"] for q in questions],
            start_time=start_time,
            status="in_progress",
        )
        try:
            db.add(interview)
            db.commit()
            interview_id = interview.id
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("[INTERVIEW_CREATE] insert failed, falling back to mock: %r", e)
            is_mock = True

    if is_mock:
        ts = mock_problems.now_ms()
        interview_id = mock_problems.mock_interview_id(topics, ts)
        questions = mock_problems.pad_to_full_set(questions, topics, difficulty, topic_names, ts)

    logger.info(
        "[INTERVIEW_CREATE] id=%s mock=%s real=%d total=%d",
        interview_id, is_mock, len(selected), len(questions),
    )

    return {
        "id": interview_id,
        "duration": req.duration,
        "questions": questions,
        "startTime": _iso(start_time),
        "isMockInterview": is_mock,
        "companyType": req.company_type,
        "targetCompanies": req.target_companies or [],
        "questionCount": {
            "real": len(selected),
            "mock": len(questions) - len(selected),
            "total": len(questions),
        },
    }


# ----------------------------
# fetch
# ----------------------------
def regenerate_mock_interview(interview_id: str) -> Dict[str, Any]:
    """Mock interviews live in the browser; rebuild placeholders from the topics in the id."""
    topics = mock_problems.topics_from_mock_id(interview_id)
    if not topics:
        return {
            "message": "Mock interview - client should use localStorage data",
            "isMockInterview": True,
        }

    return {
        "id": interview_id,
        "duration": MOCK_DEFAULT_DURATION,
        "questions": mock_problems.regenerate_mock_problems(topics),
        "startTime": _iso(datetime.now(timezone.utc)),
        "isMockInterview": True,
        "isRegenerated": True,
    }


def get_interview(db: Session, user_id: str, interview_id: str) -> Dict[str, Any]:
    interview = _owned_interview(db, user_id, interview_id)

    ids = list(interview.problems or [])
    by_id = {p.id: p for p in db.query(Problem).filter(Problem.id.in_(ids)).all()} if ids else {}
    problems = [by_id[i] for i in ids if i in by_id]
    if not problems:
        raise HTTPException(status_code=404, detail="No problems found for this interview")

    return {
        "id": interview.id,
        "duration": interview.duration,
        "questions": [
            {
                "id": p.id,
                "title": p.title,
                "description": p.description,
                "difficulty": p.difficulty,
                "template": mock_problems.default_template(p.title),
            }
            for p in problems
        ],
        "startTime": _iso(interview.start_time),
        "status": interview.status,
    }


# ----------------------------
# submit
# ----------------------------
def submit_solution(
    db: Session,
    user_id: str,
    interview_id: str,
    req: SolutionSubmitRequest,
) -> Submission:
    interview = _owned_interview(db, user_id, interview_id)

    if interview.status == "completed":
        raise HTTPException(status_code=400, detail="Interview already completed")
    if req.problem_id not in (interview.problems or []):
        raise HTTPException(status_code=400, detail="Problem is not part of this interview")

    sub = (
        db.query(Submission)
        .filter(Submission.interview_id == interview.id, Submission.problem_id == req.problem_id)
        .first()
    )
    if sub is None:
        sub = Submission(interview_id=interview.id, problem_id=req.problem_id)
        db.add(sub)

    # a re-submit replaces the code and clears the previous review
    sub.code = req.code
    sub.language = req.language
    sub.submitted_at = datetime.now(timezone.utc)
    sub.status = "pending"
    sub.score = None
    sub.time_complexity = None
    sub.space_complexity = None
    sub.feedback = None
    sub.suggestions = None

    db.commit()
    db.refresh(sub)
    logger.info("[INTERVIEW_SUBMIT] interview=%s problem=%s submission=%s", interview.id, req.problem_id, sub.id)
    return sub


# ----------------------------
# complete
# ----------------------------
def complete_interview(db: Session, user_id: str, interview_id: str) -> Dict[str, Any]:
    interview = _owned_interview(db, user_id, interview_id)

    if interview.status == "completed":
        raise HTTPException(status_code=400, detail="Interview already completed")

    rows = (
        db.query(Submission, Problem.title)
        .join(Problem, Problem.id == Submission.problem_id)
        .filter(Submission.interview_id == interview.id)
        .order_by(Submission.submitted_at.asc())
        .all()
    )
    views = [
        SubmissionView(
            problem_id=sub.problem_id,
            title=title,
            submitted_at=sub.submitted_at,
            status=sub.status,
            score=sub.score,
            feedback=sub.feedback,
            suggestions=sub.suggestions or [],
            time_complexity=sub.time_complexity,
            space_complexity=sub.space_complexity,
        )
        for sub, title in rows
    ]

    report = feedback_service.synthesize_feedback(views, interview.start_time, interview.duration)

    interview.status = "completed"
    interview.completed_at = datetime.now(timezone.utc)
    interview.feedback = report
    db.commit()

    logger.info("[INTERVIEW_COMPLETE] id=%s score=%s questions=%d", interview.id, report["overallScore"], len(views))
    return {"id": interview.id, "duration": interview.duration, **report}


def complete_mock_interview(interview_id: str, body: CompleteRequest) -> Dict[str, Any]:
    """Same rules over what the browser kept; the store is never touched."""
    titles = {q.id: q.title for q in body.questions}
    duration = body.duration or MOCK_DEFAULT_DURATION

    if isinstance(body.submissions, dict):
        # {problemId: code} as kept in local storage
        views = [
            SubmissionView(problem_id=pid, title=titles.get(pid, ""), submitted_at=None, status="submitted")
            for pid, code in body.submissions.items()
            if code
        ]
    else:
        views = [
            SubmissionView(
                problem_id=s.problem_id,
                title=s.title or titles.get(s.problem_id, ""),
                submitted_at=s.submitted_at,
                status=s.status,
                score=s.score,
                feedback=s.feedback,
                suggestions=s.suggestions,
                time_complexity=s.time_complexity,
                space_complexity=s.space_complexity,
            )
            for s in (body.submissions or [])
        ]

    report = feedback_service.synthesize_feedback(views, body.start_time, duration)
    return {"id": interview_id, "duration": duration, "isMockInterview": True, **report}


def get_feedback(db: Session, user_id: str, interview_id: str) -> Dict[str, Any]:
    interview = _owned_interview(db, user_id, interview_id)
    if interview.status != "completed" or not interview.feedback:
        raise HTTPException(status_code=400, detail="Interview feedback not available yet")

    fb = interview.feedback
    return {
        "id": interview.id,
        "overallScore": fb.get("overallScore"),
        "duration": interview.duration,
        "timeSpent": fb.get("timeSpent"),
        "questionFeedback": fb.get("questionFeedback", []),
        "strengths": fb.get("strengths", []),
        "improvements": fb.get("improvements", []),
        "recommendations": fb.get("recommendations", []),
    }
