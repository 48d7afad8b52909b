import pytest
from sqlalchemy import select, func
from papernotes.notes.models import Note, Tag, notes_tags
from papernotes.notes.tags import normalize_tags, get_or_create_tag, sync_note_tags, tags_for_notes

def _note(db, user_id="u1", title="t"):
    n = Note(user_id=user_id, title=title, content="")
    db.add(n); db.commit(); db.refresh(n)
    return n

def test_normalize_tags():
    assert normalize_tags([" Work", "work", "", "  ", "Home", "HOME"]) == ["work", "home"]
    assert normalize_tags(None) == []

def test_case_variants_share_one_row(db):
    a = get_or_create_tag(db, "Work")
    b = get_or_create_tag(db, "work")
    assert a.id == b.id
    assert a.name == "work"
    assert db.scalar(select(func.count()).select_from(Tag)) == 1

def test_sync_replaces_all_join_rows(db):
    n = _note(db)
    assert sync_note_tags(db, n.id, ["Work", "Ideas"]) == ["work", "ideas"]
    assert tags_for_notes(db, [n.id]) == {n.id: ["ideas", "work"]}

    assert sync_note_tags(db, n.id, ["home"]) == ["home"]
    assert tags_for_notes(db, [n.id]) == {n.id: ["home"]}
    assert db.scalar(select(func.count()).select_from(notes_tags)) == 1
    # tags themselves are never deleted
    assert db.scalar(select(func.count()).select_from(Tag)) == 3

def test_tags_shared_across_notes(db):
    a, b = _note(db, title="a"), _note(db, title="b")
    sync_note_tags(db, a.id, ["Work"])
    sync_note_tags(db, b.id, ["WORK", "x"])
    m = tags_for_notes(db, [a.id, b.id])
    assert m[a.id] == ["work"] and m[b.id] == ["work", "x"]
    assert db.scalar(select(func.count()).select_from(Tag)) == 2

def test_tags_for_notes_empty(db):
    assert tags_for_notes(db, []) == {}

def test_sync_failure_keeps_tags_attached_so_far(db, monkeypatch):
    from sqlalchemy.exc import SQLAlchemyError
    from papernotes.notes import tags as tags_mod

    n = _note(db)
    sync_note_tags(db, n.id, ["old"])
    real = tags_mod.get_or_create_tag

    def flaky(db_, name):
        if name == "second":
            raise SQLAlchemyError("insert failed")
        return real(db_, name)

    monkeypatch.setattr(tags_mod, "get_or_create_tag", flaky)
    with pytest.raises(SQLAlchemyError):
        sync_note_tags(db, n.id, ["first", "second", "third"])
    assert tags_for_notes(db, [n.id]) == {n.id: ["first"]}
