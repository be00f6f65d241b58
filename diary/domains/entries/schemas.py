import uuid
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator

from diary.db.models.entry import TITLE_MAX_LENGTH
from diary.domains.identity.schemas import CamelModel

SortField = Literal["createdAt", "updatedAt", "title", "mood"]
SortOrder = Literal["asc", "desc"]

PASSCODE_MAX_LENGTH = 128
BULK_EXPORT_MAX_IDS = 500


def _clean_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError('Title cannot be empty')
    if len(v) > TITLE_MAX_LENGTH:
        raise ValueError(f'Title must be at most {TITLE_MAX_LENGTH} characters')
    return v


def _clean_content(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError('Content cannot be empty')
    return v


class EntryCreate(CamelModel):
    title: str
    content: str
    tags: Optional[str] = Field(None, max_length=500)
    mood: Optional[str] = Field(None, max_length=32)
    passcode: Optional[str] = Field(None, max_length=PASSCODE_MAX_LENGTH)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return _clean_content(v)

    @field_validator('tags', 'mood')
    @classmethod
    def validate_optional_text(cls, v):
        if v is None:
            return v
        return v.strip() or None


class EntryUpdate(CamelModel):
    """Any subset of the entry fields; empty tags/mood/passcode clear them"""

    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[str] = Field(None, max_length=500)
    mood: Optional[str] = Field(None, max_length=32)
    passcode: Optional[str] = Field(None, max_length=PASSCODE_MAX_LENGTH)
    # Needed to change or remove an existing passcode
    current_passcode: Optional[str] = Field(None, max_length=PASSCODE_MAX_LENGTH)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return v if v is None else _clean_title(v)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return v if v is None else _clean_content(v)

    @field_validator('tags', 'mood')
    @classmethod
    def validate_optional_text(cls, v):
        return v if v is None else v.strip()


class EntryResponse(CamelModel):
    id: uuid.UUID
    title: str
    content: Optional[str] = None
    tags: Optional[str] = None
    mood: Optional[str] = None
    has_passcode: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entry, include_content: bool = True) -> "EntryResponse":
        """Serialize an entry; the passcode hash is never part of the response"""
        return cls(
            id=entry.uuid,
            title=entry.title,
            content=entry.content if include_content else None,
            tags=entry.tags,
            mood=entry.mood,
            has_passcode=entry.has_passcode,
            created_at=entry.created_at,
            updated_at=entry.updated_at
        )


class EntryEnvelope(CamelModel):
    entry: EntryResponse
    message: Optional[str] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class EntryListResponse(CamelModel):
    entries: List[EntryResponse]
    pagination: Pagination


class EntryStatsResponse(CamelModel):
    total_entries: int
    this_month_entries: int
    today_entries: int
    last_entry_date: Optional[datetime] = None


class EntryTemplate(CamelModel):
    id: str
    name: str
    description: str
    content: str
    tags: str
    mood: str


class MessageResponse(CamelModel):
    message: str


class BulkExportRequest(CamelModel):
    entry_ids: List[str] = Field(..., min_length=1, max_length=BULK_EXPORT_MAX_IDS)
    passcodes: Dict[str, str] = Field(default_factory=dict)
