# papernotes/summarize/api.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from papernotes.shared.auth import bearer, resolve_token
from papernotes.shared.db import get_db
from .service import summarize_text, attach_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Summarize"])

def _summarize_and_store(db: Session, user_id: str, text: str, note_id) -> str:
    summary = summarize_text(text)
    if note_id:
        try:
            if attach_summary(db, user_id, str(note_id), summary) is None:
                logger.error("Error updating note with summary: note %s not found", note_id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error updating note with summary: %s", e)
    return summary

@router.post("/summarize")
async def api_summarize(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
):
    """
    Body ``{"text": ..., "noteId": ...}``. Errors come back as ``{"error": ...}``
    rather than FastAPI's validation payload.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    text = body.get("text")
    if not text:
        return JSONResponse({"error": "Text is required"}, status_code=400)
    if not isinstance(text, str):
        return JSONResponse({"error": "Text must be a string"}, status_code=400)
    if not creds:
        return JSONResponse({"error": "Unauthorized"}, status_code=401)
    try:
        user = resolve_token(creds.credentials)
    except HTTPException:
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    try:
        # summarizer and session are blocking
        summary = await run_in_threadpool(_summarize_and_store, db, user["sub"], text, body.get("noteId"))
        return {"summary": summary}
    except Exception:
        logger.exception("Error in summarize API")
        return JSONResponse({"error": "Internal server error"}, status_code=500)
