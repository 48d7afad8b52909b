"""
Presentation metadata and AI summaries live inside a note's ``content``:

    <!-- noteColor: blue, noteStyle: grid -->
    <p>body...</p>

    ## Summary
    summary text

The marker is prefixed on every save; the summary section is appended (or
replaced) by the summarizer. Decoding is permissive: the first marker wins and
captured values are not validated.
"""
import re

from bs4 import BeautifulSoup

DEFAULT_COLOR = "default"
DEFAULT_STYLE = "lined"

SUMMARY_HEADER = "\n\n## Summary\n"

_STYLE_RE = re.compile(r"<!-- noteColor: (.*?), noteStyle: (.*?) -->")
_SUMMARY_RE = re.compile(r"\n\n## Summary\n([\s\S]*)$")
_WS_RE = re.compile(r"\s+")


def style_marker(color: str, style: str) -> str:
    return f"<!-- noteColor: {color}, noteStyle: {style} -->"


def encode_style(body: str, color: str = DEFAULT_COLOR, style: str = DEFAULT_STYLE) -> str:
    """Prefix ``body`` with a style marker, dropping any marker it already has."""
    return f"{style_marker(color, style)}\n{strip_style(body or '')}"


def decode_style(content: str) -> dict:
    m = _STYLE_RE.search(content or "")
    if m:
        return {"color": m.group(1), "style": m.group(2)}
    return {"color": DEFAULT_COLOR, "style": DEFAULT_STYLE}


def strip_style(content: str) -> str:
    if not _STYLE_RE.search(content or ""):
        return content or ""
    return _STYLE_RE.sub("", content, count=1).strip()


def has_summary(content: str) -> bool:
    return SUMMARY_HEADER in (content or "")


def split_summary(content: str) -> tuple[str, str | None]:
    """Return ``(main_content, summary)``; summary is None when there is no section."""
    content = content or ""
    m = _SUMMARY_RE.search(content)
    if not m:
        return content, None
    return content[:m.start()], m.group(1)


def merge_summary(content: str, summary: str) -> str:
    """Append a summary section, or replace the existing one."""
    content = content or ""
    if _SUMMARY_RE.search(content):
        # callable repl so backslashes in the summary are kept literally
        return _SUMMARY_RE.sub(lambda _m: SUMMARY_HEADER + summary, content, count=1)
    return content + SUMMARY_HEADER + summary


def body_of(content: str) -> str:
    main, _ = split_summary(content)
    return strip_style(main)


def plain_text(content: str) -> str:
    """Body text with markup removed, for feeding the summarizer."""
    text = BeautifulSoup(body_of(content), "html.parser").get_text(separator=" ")
    return _WS_RE.sub(" ", text).strip()


def view(content: str) -> dict:
    main, summary = split_summary(content)
    return {**decode_style(main), "body": strip_style(main), "summary": summary}
