from __future__ import annotations
import logging
import re

import httpx
from sqlalchemy.orm import Session

from papernotes.shared.config import settings
from papernotes.notes import codec
from papernotes.notes.service import get_note, save_content

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an AI assistant that summarizes text. Provide a concise summary in 2-3 sentences."
EMPTY_COMPLETION = "Failed to generate summary"

_SENTENCE_RE = re.compile(r"[.!?]")
_WORDS_RE = re.compile(r"\s+")


def mock_summarize(text: str) -> str:
    """Deterministic summary: word count plus the first sentence."""
    text = text or ""
    fragments = [s for s in _SENTENCE_RE.split(text) if s.strip()]
    first = fragments[0] if fragments else ""
    # leading/trailing whitespace yields empty pieces, and they are counted
    word_count = len(_WORDS_RE.split(text))
    return (
        f"This note contains {word_count} words. {first.strip()}. "
        "The note covers key information that has been condensed in this summary."
    )


def build_payload(text: str) -> dict:
    return {
        "model": settings.GROQ_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"Summarize the following text:\n\n{text}"},
        ],
        "temperature": 0.5,
        "max_tokens": 200,
    }


def summarize_with_groq(text: str, api_key: str, client: httpx.Client | None = None) -> str | None:
    """One chat-completion request. Returns None on any failure."""
    url = f"{settings.GROQ_BASE_URL.rstrip('/')}/chat/completions"
    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"}
    http = client or httpx.Client()
    try:
        resp = http.post(url, headers=headers, json=build_payload(text))
        if resp.status_code >= 400:
            logger.warning("Groq API error: %s %s", resp.status_code, resp.text[:500])
            return None
        data = resp.json()
        choices = data.get("choices") or []
        content = (choices[0].get("message") or {}).get("content") if choices else None
        if content is not None and not isinstance(content, str):
            logger.warning("Groq API returned non-text content: %r", content)
            return None
        return content or EMPTY_COMPLETION
    except (httpx.HTTPError, ValueError, AttributeError, KeyError, IndexError, TypeError) as e:
        logger.warning("Error in Groq API call: %s", e)
        return None
    finally:
        if client is None:
            http.close()


def summarize_text(text: str, api_key: str | None = None, client: httpx.Client | None = None) -> str:
    """Never raises: the LLM is tried once when a key is configured, else the local summary."""
    key = api_key if api_key is not None else settings.GROQ_API_KEY
    if key:
        summary = summarize_with_groq(text, key, client=client)
        if summary:
            return summary
        logger.info("Groq summary unavailable, using local summary")
    return mock_summarize(text)


def attach_summary(db: Session, user_id: str, note_id: str, summary: str):
    """Merge ``summary`` into the note's content; None when the note is not the caller's."""
    note = get_note(db, user_id, note_id)
    if not note:
        return None
    return save_content(db, user_id, note_id, codec.merge_summary(note.content, summary))


def summarize_note(db: Session, user_id: str, note_id: str, client: httpx.Client | None = None):
    note = get_note(db, user_id, note_id)
    if not note:
        raise LookupError(note_id)
    text = codec.plain_text(note.content)
    if not text:
        raise ValueError("Note content is empty, nothing to summarize")
    summary = summarize_text(text, client=client)
    note = attach_summary(db, user_id, note_id, summary)
    logger.info("summary stored on note %s", note_id)
    return summary, note
