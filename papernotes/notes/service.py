import logging
from sqlalchemy.orm import Session
from sqlalchemy import select, desc
from papernotes.notes.models import Note, Tag, notes_tags
from papernotes.notes.schemas import NoteCreate, NoteUpdate
from papernotes.notes import codec
from papernotes.notes.tags import sync_note_tags, clear_note_tags, tags_for_notes

logger = logging.getLogger(__name__)

def _clean_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValueError("Please enter a title")
    return title

def note_out(note: Note, tags: list[str]) -> dict:
    """ORM row plus the fields decoded from its content."""
    return {
        "id": note.id,
        "user_id": note.user_id,
        "title": note.title,
        "content": note.content,
        **codec.view(note.content),
        "tags": tags,
        "created_at": note.created_at,
        "updated_at": note.updated_at,
    }

def view_note(db: Session, note: Note) -> dict:
    return note_out(note, tags_for_notes(db, [note.id])[note.id])

def get_note(db: Session, user_id: str, note_id: str) -> Note | None:
    note = db.get(Note, note_id)
    if not note or note.user_id != user_id:
        return None
    return note

def create_note(db: Session, user_id: str, payload: NoteCreate) -> dict:
    note = Note(
        user_id=user_id,
        title=_clean_title(payload.title),
        content=codec.encode_style(payload.content, payload.color, payload.style),
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    tags = sync_note_tags(db, note.id, payload.tags) if payload.tags else []
    logger.info("note %s created for %s with %d tag(s)", note.id, user_id, len(tags))
    return note_out(note, tags)

def list_notes(db: Session, user_id: str, q: str | None = None, tag: str | None = None, sort: str = "newest") -> list[dict]:
    rows = db.scalars(
        select(Note).where(Note.user_id == user_id).order_by(desc(Note.created_at))
    ).all()
    tag_map = tags_for_notes(db, [n.id for n in rows])
    items = [note_out(n, tag_map.get(n.id, [])) for n in rows]

    if q:
        needle = q.lower()
        items = [
            i for i in items
            if needle in i["title"].lower()
            or needle in codec.strip_style(i["content"]).lower()
            or any(needle in t for t in i["tags"])
        ]
    if tag:
        wanted = tag.strip().lower()
        items = [i for i in items if wanted in i["tags"]]
    return sort_notes(items, sort)

def sort_notes(items: list[dict], sort: str = "newest") -> list[dict]:
    if sort == "newest":
        return sorted(items, key=lambda i: i["created_at"], reverse=True)
    if sort == "oldest":
        return sorted(items, key=lambda i: i["created_at"])
    if sort == "title":
        return sorted(items, key=lambda i: i["title"].casefold())
    return items

def all_tags(db: Session, user_id: str) -> list[str]:
    rows = db.scalars(
        select(Tag.name)
        .join(notes_tags, notes_tags.c.tag_id == Tag.id)
        .join(Note, Note.id == notes_tags.c.note_id)
        .where(Note.user_id == user_id)
        .distinct()
    ).all()
    return sorted(rows)

def update_note(db: Session, user_id: str, note_id: str, payload: NoteUpdate) -> dict | None:
    """
    Partial update. A new ``content`` replaces the body; the current style and
    any existing summary section are carried over unless overridden. ``tags``
    when given replaces the whole tag set. Last write wins.
    """
    note = get_note(db, user_id, note_id)
    if not note:
        return None
    if payload.title is not None:
        note.title = _clean_title(payload.title)

    main, summary = codec.split_summary(note.content)
    current = codec.decode_style(main)
    body = payload.content if payload.content is not None else codec.strip_style(main)
    content = codec.encode_style(body, payload.color or current["color"], payload.style or current["style"])
    if summary is not None and not codec.has_summary(body):
        content = codec.merge_summary(content, summary)
    note.content = content

    db.commit()
    db.refresh(note)
    if payload.tags is not None:
        tags = sync_note_tags(db, note.id, payload.tags)
    else:
        tags = tags_for_notes(db, [note.id])[note.id]
    return note_out(note, tags)

def save_content(db: Session, user_id: str, note_id: str, content: str) -> Note | None:
    note = get_note(db, user_id, note_id)
    if not note:
        return None
    note.content = content
    db.commit()
    db.refresh(note)
    return note

def delete_note(db: Session, user_id: str, note_id: str) -> bool:
    note = get_note(db, user_id, note_id)
    if not note:
        return False
    clear_note_tags(db, note.id)
    db.delete(note)
    db.commit()
    logger.info("note %s deleted for %s", note_id, user_id)
    return True
