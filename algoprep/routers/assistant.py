import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from algoprep.schemas.chat import ChatRequest
from algoprep.services import chat_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["assistant"])


def _stream(name: str, payload: ChatRequest) -> StreamingResponse:
    try:
        chunks = chat_service.stream_answer(name, payload)
    except Exception as e:
        logger.error("[CHAT] %s failed: %r", name, e)
        raise HTTPException(status_code=500, detail="Failed to process request")
    return StreamingResponse(chunks, media_type="text/plain; charset=utf-8")


@router.post("/explain")
def explain(payload: ChatRequest):
    return _stream("explain", payload)


@router.post("/code-analyze")
def code_analyze(payload: ChatRequest):
    return _stream("code-analyze", payload)


@router.post("/code-help")
def code_help(payload: ChatRequest):
    return _stream("code-help", payload)


@router.post("/docs")
def docs(payload: ChatRequest):
    return _stream("docs", payload)


@router.post("/info-help")
def info_help(payload: ChatRequest):
    return _stream("info-help", payload)
