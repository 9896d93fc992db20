# read-only tag lists, seeded outside the app
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from algoprep.deps import get_db
from algoprep.schemas.problem import TagOut
from algoprep.services import problem_service

router = APIRouter(prefix="/api", tags=["taxonomy"])


@router.get("/patterns", response_model=List[TagOut])
def list_patterns(db: Session = Depends(get_db)):
    return problem_service.list_patterns(db)


@router.get("/topics", response_model=List[TagOut])
def list_topics(db: Session = Depends(get_db)):
    return problem_service.list_topics(db)
