import logging
from typing import Iterable
from sqlalchemy import select, delete, insert
from sqlalchemy.orm import Session
from papernotes.notes.models import Tag, notes_tags

logger = logging.getLogger(__name__)

def normalize_tags(names: Iterable[str] | None) -> list[str]:
    """Trim, lowercase and de-duplicate, keeping first-seen order."""
    out: list[str] = []
    for n in names or []:
        t = (n or "").strip().lower()
        if t and t not in out:
            out.append(t)
    return out

def get_or_create_tag(db: Session, name: str) -> Tag:
    name = name.strip().lower()
    tag = db.scalars(select(Tag).where(Tag.name == name)).first()
    if tag:
        return tag
    tag = Tag(name=name)
    db.add(tag)
    db.commit()
    db.refresh(tag)
    logger.debug("created tag %r", name)
    return tag

def sync_note_tags(db: Session, note_id: str, names: Iterable[str] | None) -> list[str]:
    """
    Replace every tag on a note. Existing join rows are removed first and each
    tag is attached with its own commit, so a failure part-way through leaves
    the note with only the tags attached so far.
    """
    db.execute(delete(notes_tags).where(notes_tags.c.note_id == note_id))
    db.commit()
    attached = []
    for name in normalize_tags(names):
        tag = get_or_create_tag(db, name)
        db.execute(insert(notes_tags).values(note_id=note_id, tag_id=tag.id))
        db.commit()
        attached.append(tag.name)
    return attached

def clear_note_tags(db: Session, note_id: str):
    db.execute(delete(notes_tags).where(notes_tags.c.note_id == note_id))

def tags_for_notes(db: Session, note_ids: list[str]) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {nid: [] for nid in note_ids}
    if not note_ids:
        return out
    rows = db.execute(
        select(notes_tags.c.note_id, Tag.name)
        .join(Tag, Tag.id == notes_tags.c.tag_id)
        .where(notes_tags.c.note_id.in_(note_ids))
        .order_by(Tag.name)
    ).all()
    for note_id, name in rows:
        out.setdefault(note_id, []).append(name)
    return out
