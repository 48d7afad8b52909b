# papernotes/notes/api.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from papernotes.shared.db import get_db
from papernotes.shared.auth import get_user
from papernotes.shared.http import err
from papernotes.notes.schemas import NoteCreate, NoteUpdate, NoteOut, NoteList, NoteSummaryOut, SortOrder
from papernotes.notes.service import (
    create_note,
    get_note,
    list_notes,
    update_note,
    delete_note,
    all_tags,
    view_note,
)
from papernotes.summarize.service import summarize_note

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])

def _persistence_failed(db: Session, action: str, e: Exception):
    db.rollback()
    logger.error("Error %s note: %s", action, e)
    err(f"Failed to {action} note", code="persistence_failed", status=500)

@router.post("", response_model=NoteOut, status_code=201)
def api_create_note(payload: NoteCreate, user=Depends(get_user), db: Session = Depends(get_db)):
    try:
        return create_note(db, user["sub"], payload)
    except ValueError as e:
        err(str(e), code="invalid_input")
    except SQLAlchemyError as e:
        _persistence_failed(db, "create", e)

@router.get("", response_model=NoteList)
def api_list_notes(
    q: str | None = Query(None, description="Match against title, content and tags"),
    tag: str | None = Query(None),
    sort: SortOrder = Query("newest"),
    user=Depends(get_user),
    db: Session = Depends(get_db),
):
    try:
        items = list_notes(db, user["sub"], q=q, tag=tag, sort=sort)
    except SQLAlchemyError as e:
        _persistence_failed(db, "load", e)
    return {"items": items, "count": len(items)}

@router.get("/tags")
def api_list_tags(user=Depends(get_user), db: Session = Depends(get_db)):
    try:
        return {"items": all_tags(db, user["sub"])}
    except SQLAlchemyError as e:
        _persistence_failed(db, "load", e)

@router.get("/{note_id}", response_model=NoteOut)
def api_get_note(note_id: str, user=Depends(get_user), db: Session = Depends(get_db)):
    note = get_note(db, user["sub"], note_id)
    if not note:
        raise HTTPException(404, "Note not found")
    return view_note(db, note)

@router.patch("/{note_id}", response_model=NoteOut)
def api_update_note(note_id: str, payload: NoteUpdate, user=Depends(get_user), db: Session = Depends(get_db)):
    try:
        out = update_note(db, user["sub"], note_id, payload)
    except ValueError as e:
        err(str(e), code="invalid_input")
    except SQLAlchemyError as e:
        _persistence_failed(db, "update", e)
    if not out:
        raise HTTPException(404, "Note not found")
    return out

@router.delete("/{note_id}", status_code=204)
def api_delete_note(note_id: str, user=Depends(get_user), db: Session = Depends(get_db)):
    try:
        deleted = delete_note(db, user["sub"], note_id)
    except SQLAlchemyError as e:
        _persistence_failed(db, "delete", e)
    if not deleted:
        raise HTTPException(404, "Note not found")
    return

@router.post("/{note_id}/summarize", response_model=NoteSummaryOut)
def api_summarize_note(note_id: str, user=Depends(get_user), db: Session = Depends(get_db)):
    try:
        summary, note = summarize_note(db, user["sub"], note_id)
    except LookupError:
        raise HTTPException(404, "Note not found")
    except ValueError as e:
        err(str(e), code="invalid_input")
    except SQLAlchemyError as e:
        _persistence_failed(db, "summarize", e)
    return {"summary": summary, "note": view_note(db, note)}
