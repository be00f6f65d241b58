"""Builds the self-contained HTML documents that are printed to PDF."""

import html
from datetime import datetime
from typing import Optional, Sequence

from diary.domains.entries.entities import Entry
from diary.domains.export.sanitizer import sanitize_html

DATE_FORMAT = "%A, %B %d, %Y"
TIMESTAMP_FORMAT = "%B %d, %Y at %H:%M UTC"

STYLESHEET = """
@page { size: A4; }
* { box-sizing: border-box; }
body {
    font-family: "Georgia", "Times New Roman", serif;
    font-size: 12pt;
    line-height: 1.6;
    color: #1f2937;
    margin: 0;
}
.cover {
    text-align: center;
    padding-bottom: 16pt;
    margin-bottom: 24pt;
    border-bottom: 2px solid #e5e7eb;
}
.cover h1 { font-size: 28pt; margin-bottom: 8pt; }
.cover p { color: #6b7280; margin: 4pt 0; }
.entry-header {
    border-bottom: 2px solid #e5e7eb;
    padding-bottom: 10pt;
    margin-bottom: 16pt;
}
.entry-title { font-size: 20pt; margin: 0 0 6pt 0; }
.entry-meta { color: #6b7280; font-size: 10pt; }
.entry-mood { font-size: 18pt; margin-left: 6pt; }
.entry-tags { margin-top: 6pt; }
.entry-tag {
    display: inline-block;
    background: #eef2ff;
    color: #3730a3;
    border-radius: 8pt;
    padding: 1pt 7pt;
    margin-right: 4pt;
    font-size: 9pt;
}
.entry-content h1, .entry-content h2, .entry-content h3 { line-height: 1.3; }
.entry-content blockquote {
    border-left: 3px solid #d1d5db;
    margin-left: 0;
    padding-left: 10pt;
    color: #4b5563;
}
.entry-content pre, .entry-content code { font-family: "Courier New", monospace; font-size: 10pt; }
.entry-footer {
    margin-top: 24pt;
    padding-top: 6pt;
    border-top: 1px solid #e5e7eb;
    color: #9ca3af;
    font-size: 8pt;
    text-align: right;
}
.page-break { page-break-after: always; break-after: page; }
"""


def clean_text(value: Optional[str]) -> str:
    """Plain user text made safe for text nodes and attribute values"""
    if not value:
        return ""
    stripped = value.replace("<", "").replace(">", "")
    return html.escape(stripped, quote=True)


def _document(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        "<html lang=\"en\">\n"
        "<head>\n"
        "<meta charset=\"utf-8\">\n"
        f"<title>{clean_text(title)}</title>\n"
        f"<style>{STYLESHEET}</style>\n"
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def _entry_header(entry: Entry) -> str:
    mood = f'<span class="entry-mood">{clean_text(entry.mood)}</span>' if entry.mood else ""
    tags = ""
    if entry.tag_list():
        chips = "".join(f'<span class="entry-tag">{clean_text(tag)}</span>' for tag in entry.tag_list())
        tags = f'<div class="entry-tags">{chips}</div>'

    return (
        '<div class="entry-header">'
        f'<h1 class="entry-title">{clean_text(entry.title)}{mood}</h1>'
        f'<div class="entry-meta">{entry.created_at.strftime(DATE_FORMAT)}</div>'
        f"{tags}"
        "</div>"
    )


def _entry_section(entry: Entry, exported_at: datetime, page_break: bool) -> str:
    classes = "entry page-break" if page_break else "entry"
    return (
        f'<section class="{classes}">'
        f"{_entry_header(entry)}"
        f'<div class="entry-content">{sanitize_html(entry.content)}</div>'
        f'<div class="entry-footer">Exported from My Diary on {exported_at.strftime(TIMESTAMP_FORMAT)}</div>'
        "</section>"
    )


def compose_entry_document(entry: Entry, exported_at: Optional[datetime] = None) -> str:
    """HTML document for a single entry"""
    exported_at = exported_at or datetime.utcnow()
    return _document(entry.title, _entry_section(entry, exported_at, page_break=False))


def compose_bulk_document(entries: Sequence[Entry], exported_at: Optional[datetime] = None) -> str:
    """HTML document for several entries: a cover block on the first page, then one entry per page.

    Entries are rendered in the order given; callers pass them most recent first.
    """
    exported_at = exported_at or datetime.utcnow()
    count = len(entries)
    noun = "entry" if count == 1 else "entries"

    cover = (
        '<section class="cover">'
        "<h1>My Diary</h1>"
        f"<p>{count} {noun}</p>"
        f"<p>Exported on {exported_at.strftime(TIMESTAMP_FORMAT)}</p>"
        "</section>"
    )
    sections = [
        _entry_section(entry, exported_at, page_break=index < count - 1)
        for index, entry in enumerate(entries)
    ]
    return _document(f"Diary Entries ({count})", cover + "".join(sections))
