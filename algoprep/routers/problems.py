from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from algoprep.deps import get_db, require_admin
from algoprep.schemas.problem import ProblemIn, ProblemOut
from algoprep.services import problem_service

router = APIRouter(prefix="/api/problems", tags=["problems"])


@router.get("", response_model=List[ProblemOut])
def list_problems(
    pattern_id: Optional[str] = None,
    topic_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return problem_service.list_problems(db, pattern_id, topic_id)


@router.post("", response_model=ProblemOut)
def create_problem(
    payload: ProblemIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    return problem_service.create_problem(db, payload)


@router.get("/{problem_id}", response_model=ProblemOut)
def get_problem(problem_id: str, db: Session = Depends(get_db)):
    return problem_service.get_problem(db, problem_id)


@router.put("/{problem_id}", response_model=ProblemOut)
def replace_problem(
    problem_id: str,
    payload: ProblemIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    return problem_service.replace_problem(db, problem_id, payload)


@router.delete("/{problem_id}", status_code=204)
def delete_problem(
    problem_id: str,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    problem_service.delete_problem(db, problem_id)
    return Response(status_code=204)
