"""
Background review of interview submissions.

Delivery is at-most-once: a queued review runs once after the response is
sent, in its own DB session. Failures are logged and the submission stays
`pending`; nothing retries it.
"""
import logging

from fastapi import BackgroundTasks

from algoprep.db.base import SessionLocal
from algoprep.models.problem import Problem
from algoprep.models.submission import Submission
from algoprep.schemas.review import ReviewProblem, ReviewSubmission
from algoprep.services.review_service import review_code

logger = logging.getLogger(__name__)


def _apply_review(sub: Submission, review: dict) -> None:
    perf = review.get("performance") or {}
    sub.score = int(round(review.get("score") or 0))
    sub.time_complexity = perf.get("time")
    sub.space_complexity = perf.get("space")
    sub.feedback = review.get("overallFeedback")
    sub.suggestions = list(review.get("improvements") or [])
    sub.status = "reviewed"


def run_review(submission_id: str) -> None:
    db = SessionLocal()
    try:
        sub = db.get(Submission, submission_id)
        if not sub:
            logger.warning("[REVIEW_TASK] submission %s vanished before review", submission_id)
            return
        problem = db.get(Problem, sub.problem_id)
        if not problem:
            logger.warning("[REVIEW_TASK] problem %s not found for submission %s", sub.problem_id, submission_id)
            return

        # snapshot the code we are reviewing; a re-submit during the review wins
        code = sub.code
        review = review_code(
            ReviewProblem(
                title=problem.title,
                description=problem.description,
                constraints=problem.constraints or None,
            ),
            ReviewSubmission(code=code, language=sub.language or "python"),
        )

        db.refresh(sub)
        if sub.code != code:
            logger.info("[REVIEW_TASK] submission %s changed during review, dropping result", submission_id)
            return

        _apply_review(sub, review)
        db.commit()
        logger.info("[REVIEW_TASK] submission %s reviewed score=%s", submission_id, sub.score)
    except Exception as e:
        db.rollback()
        logger.error("[REVIEW_TASK] review failed for submission %s: %r", submission_id, e)
    finally:
        db.close()


def enqueue_review(background_tasks: BackgroundTasks, submission_id: str) -> None:
    background_tasks.add_task(run_review, submission_id)
