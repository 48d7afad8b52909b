from datetime import datetime
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, Field

from papernotes.shared.config import settings

NoteColor = Literal["default", "cream", "yellow", "blue", "pink", "green"]
NoteStyle = Literal["lined", "grid", "dots", "aged"]
SortOrder = Literal["newest", "oldest", "title"]
TagName = Annotated[str, Field(max_length=50)]  # tags.name is String(50)

class NoteCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = ""
    tags: List[TagName] = Field(default_factory=list, max_length=settings.MAX_TAGS)
    color: NoteColor = "default"
    style: NoteStyle = "lined"

class NoteUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = None
    # None leaves tags untouched; a list (even empty) replaces them
    tags: Optional[List[TagName]] = Field(default=None, max_length=settings.MAX_TAGS)
    color: Optional[NoteColor] = None
    style: Optional[NoteStyle] = None

class NoteOut(BaseModel):
    id: str
    user_id: str
    title: str
    content: str
    body: str
    color: str
    style: str
    summary: str | None = None
    tags: List[str]
    created_at: datetime
    updated_at: datetime | None = None

class NoteList(BaseModel):
    items: List[NoteOut]
    count: int

class NoteSummaryOut(BaseModel):
    summary: str
    note: NoteOut
