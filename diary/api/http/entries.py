from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from diary.core.auth import get_current_user
from diary.core.db import get_db
from diary.domains.entries.schemas import (
    EntryCreate, EntryUpdate, EntryResponse, EntryEnvelope, EntryListResponse,
    EntryStatsResponse, EntryTemplate, MessageResponse, SortField, SortOrder
)
from diary.domains.entries.services import EntryService
from diary.domains.entries.templates import ENTRY_TEMPLATES
from diary.domains.identity.entities import User

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("", response_model=EntryListResponse)
async def list_entries(
    search: Optional[str] = Query(None, max_length=200),
    tags: Optional[str] = Query(None, max_length=500),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: SortField = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the caller's entries with search, tag filter, sorting and paging"""
    entries, pagination = await EntryService(db).list_entries(
        current_user.uuid,
        search=search,
        tags=tags,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order
    )

    # Protected entries are listed without their content
    return EntryListResponse(
        entries=[EntryResponse.from_entity(e, include_content=not e.has_passcode) for e in entries],
        pagination=pagination
    )


@router.get("/stats/summary", response_model=EntryStatsResponse)
async def get_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    stats = await EntryService(db).get_stats(current_user.uuid)
    return EntryStatsResponse(**stats)


@router.get("/templates", response_model=List[EntryTemplate])
async def list_templates(current_user: User = Depends(get_current_user)):
    """Starter templates for new entries"""
    return ENTRY_TEMPLATES


@router.get("/{entry_id}", response_model=EntryEnvelope)
async def get_entry(
    entry_id: uuid.UUID,
    passcode: Optional[str] = Query(None, max_length=128),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Read one entry; protected entries need the passcode"""
    entry = await EntryService(db).open_entry(entry_id, current_user.uuid, passcode)
    return EntryEnvelope(entry=EntryResponse.from_entity(entry))


@router.post("", response_model=EntryEnvelope, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: EntryCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    entry = await EntryService(db).create_entry(entry_data, current_user.uuid)
    return EntryEnvelope(
        message="Entry created successfully",
        entry=EntryResponse.from_entity(entry, include_content=not entry.has_passcode)
    )


@router.put("/{entry_id}", response_model=EntryEnvelope)
async def update_entry(
    entry_id: uuid.UUID,
    update_data: EntryUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    entry = await EntryService(db).update_entry(entry_id, update_data, current_user.uuid)
    return EntryEnvelope(
        message="Entry updated successfully",
        entry=EntryResponse.from_entity(entry, include_content=not entry.has_passcode)
    )


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_entry(
    entry_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await EntryService(db).delete_entry(entry_id, current_user.uuid)
    return MessageResponse(message="Entry deleted successfully")
