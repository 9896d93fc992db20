# algoprep/services/problem_service.py
import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from algoprep.models.pattern import Pattern
from algoprep.models.problem import Problem, ProblemPattern, ProblemTopic
from algoprep.models.submission import Submission
from algoprep.models.topic import Topic
from algoprep.schemas.problem import ProblemIn

logger = logging.getLogger(__name__)

DIFFICULTIES = ("easy", "medium", "hard")


def list_problems(
    db: Session,
    pattern_id: Optional[str] = None,
    topic_id: Optional[str] = None,
) -> List[Problem]:
    q = db.query(Problem)
    if pattern_id:
        q = q.filter(Problem.id.in_(
            db.query(ProblemPattern.problem_id).filter(ProblemPattern.pattern_id == pattern_id)
        ))
    if topic_id:
        q = q.filter(Problem.id.in_(
            db.query(ProblemTopic.problem_id).filter(ProblemTopic.topic_id == topic_id)
        ))
    return q.order_by(Problem.created_at.desc()).all()


def get_problem(db: Session, problem_id: str) -> Problem:
    problem = db.get(Problem, problem_id)
    if not problem:
        raise HTTPException(status_code=404, detail="Problem not found")
    return problem


def _validate(payload: ProblemIn) -> None:
    if not payload.title or not payload.description or not payload.difficulty:
        raise HTTPException(status_code=400, detail="Missing required fields")
    if payload.difficulty not in DIFFICULTIES:
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid difficulty", "details": {"allowed": list(DIFFICULTIES)}},
        )


def _load_tags(db: Session, model, ids: List[str], kind: str):
    ids = list(dict.fromkeys(ids))
    if not ids:
        return []
    found = db.query(model).filter(model.id.in_(ids)).all()
    missing = sorted(set(ids) - {t.id for t in found})
    if missing:
        raise HTTPException(
            status_code=400,
            detail={"error": f"Unknown {kind} ids", "details": missing},
        )
    return found


def _apply(db: Session, problem: Problem, payload: ProblemIn) -> None:
    problem.title = payload.title
    problem.description = payload.description
    problem.difficulty = payload.difficulty
    problem.category = payload.category
    problem.examples = [e.model_dump(exclude_none=True) for e in payload.examples]
    problem.constraints = list(payload.constraints)
    problem.test_cases = [t.model_dump() for t in payload.test_cases]
    problem.time_complexity = payload.time_complexity
    problem.space_complexity = payload.space_complexity
    problem.context = payload.context
    problem.patterns = _load_tags(db, Pattern, payload.pattern_ids, "pattern")
    problem.topics = _load_tags(db, Topic, payload.topic_ids, "topic")


def create_problem(db: Session, payload: ProblemIn) -> Problem:
    _validate(payload)
    problem = Problem()
    _apply(db, problem, payload)
    db.add(problem)
    db.commit()
    db.refresh(problem)
    logger.info("[PROBLEMS] created id=%s title=%r", problem.id, problem.title)
    return problem


def replace_problem(db: Session, problem_id: str, payload: ProblemIn) -> Problem:
    problem = get_problem(db, problem_id)
    _validate(payload)
    _apply(db, problem, payload)
    db.commit()
    db.refresh(problem)
    logger.info("[PROBLEMS] replaced id=%s", problem.id)
    return problem


def delete_problem(db: Session, problem_id: str) -> None:
    problem = get_problem(db, problem_id)
    # submissions and association rows first, then the problem
    removed = (
        db.query(Submission)
        .filter(Submission.problem_id == problem.id)
        .delete(synchronize_session=False)
    )
    problem.patterns = []
    problem.topics = []
    db.flush()
    db.delete(problem)
    db.commit()
    logger.info("[PROBLEMS] deleted id=%s submissions=%d", problem_id, removed)


def list_patterns(db: Session) -> List[Pattern]:
    return db.query(Pattern).order_by(Pattern.name).all()


def list_topics(db: Session) -> List[Topic]:
    return db.query(Topic).order_by(Topic.name).all()
