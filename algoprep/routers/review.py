import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from algoprep.schemas.review import ReviewRequest
from algoprep.services import review_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/review", tags=["review"])


@router.post("")
def review(payload: ReviewRequest):
    try:
        result = review_service.review_code(payload.problem, payload.submission)
    except review_service.ReviewGenerationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return JSONResponse(content=result)
