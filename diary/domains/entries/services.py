import logging
import math
from datetime import datetime
from typing import List, Optional, Tuple
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from diary.core.errors import NotFoundError, PasscodeRequiredError
from diary.db.repositories.entry_repository import EntryRepository, EntryFilters
from diary.domains.entries.entities import Entry, EntryAccess, AccessDecision
from diary.domains.entries.schemas import EntryCreate, EntryUpdate, Pagination

logger = logging.getLogger(__name__)


def parse_tag_terms(tags: Optional[str]) -> List[str]:
    """Split a comma-separated tag filter into trimmed, non-empty terms"""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


class EntryService:
    """Entry use cases for one authenticated owner"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.entry_repository = EntryRepository(session)

    async def create_entry(self, entry_data: EntryCreate, owner_id: uuid.UUID) -> Entry:
        entry = Entry.create_entry(
            owner_id=owner_id,
            title=entry_data.title,
            content=entry_data.content,
            tags=entry_data.tags,
            mood=entry_data.mood,
            passcode=entry_data.passcode
        )
        created = await self.entry_repository.create(entry)
        logger.info(f"Entry {created.uuid} created by {owner_id}")
        return created

    async def get_owned_entry(self, entry_uuid: uuid.UUID, owner_id: uuid.UUID) -> Entry:
        """Owned entry or NotFoundError, without any passcode check"""
        entry = await self.entry_repository.get_for_owner(entry_uuid, owner_id)
        if entry is None:
            raise NotFoundError()
        return entry

    async def open_entry(
        self,
        entry_uuid: uuid.UUID,
        user_id: uuid.UUID,
        passcode: Optional[str] = None
    ) -> Entry:
        """Entry whose content the caller may read, after the access gate"""
        entry = await self.entry_repository.get_for_owner(entry_uuid, user_id)
        self._enforce(EntryAccess(entry).decide(user_id, passcode), entry_uuid)
        return entry

    async def update_entry(
        self,
        entry_uuid: uuid.UUID,
        update_data: EntryUpdate,
        owner_id: uuid.UUID
    ) -> Entry:
        entry = await self.get_owned_entry(entry_uuid, owner_id)
        fields = update_data.model_fields_set

        # Replacing or removing a passcode takes the current one
        if "passcode" in fields and entry.has_passcode:
            self._enforce(EntryAccess(entry).decide(owner_id, update_data.current_passcode), entry_uuid)

        entry.apply_changes(
            title=update_data.title,
            content=update_data.content,
            tags=update_data.tags or None,
            mood=update_data.mood or None,
            clear_tags="tags" in fields and not update_data.tags,
            clear_mood="mood" in fields and not update_data.mood
        )
        if "passcode" in fields:
            entry.set_passcode(update_data.passcode)

        updated = await self.entry_repository.update(entry)
        logger.info(f"Entry {entry_uuid} updated")
        return updated

    async def delete_entry(self, entry_uuid: uuid.UUID, owner_id: uuid.UUID) -> None:
        if not await self.entry_repository.delete(entry_uuid, owner_id):
            raise NotFoundError()
        logger.info(f"Entry {entry_uuid} deleted")

    async def list_entries(
        self,
        owner_id: uuid.UUID,
        search: Optional[str] = None,
        tags: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "createdAt",
        sort_order: str = "desc"
    ) -> Tuple[List[Entry], Pagination]:
        filters = EntryFilters(
            search=search.strip() if search and search.strip() else None,
            tags=parse_tag_terms(tags),
            sort_by=sort_by,
            sort_order=sort_order
        )
        offset = (page - 1) * limit
        entries, total = await self.entry_repository.list_for_owner(owner_id, filters, limit, offset)

        pagination = Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit) if limit else 0
        )
        return entries, pagination

    async def get_stats(self, owner_id: uuid.UUID, now: Optional[datetime] = None) -> dict:
        """Entry counts for all time, this month and today (UTC)"""
        now = now or datetime.utcnow()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_month = start_of_day.replace(day=1)

        return {
            "total_entries": await self.entry_repository.count_for_owner(owner_id),
            "this_month_entries": await self.entry_repository.count_for_owner(owner_id, since=start_of_month),
            "today_entries": await self.entry_repository.count_for_owner(owner_id, since=start_of_day),
            "last_entry_date": await self.entry_repository.latest_created_at(owner_id)
        }

    @staticmethod
    def _enforce(decision: AccessDecision, entry_uuid: uuid.UUID) -> None:
        """Turn a gate decision into the matching error"""
        if decision is AccessDecision.GRANTED:
            return
        if decision is AccessDecision.PASSCODE_REQUIRED:
            raise PasscodeRequiredError()
        if decision is AccessDecision.FORBIDDEN:
            logger.info(f"Wrong passcode presented for entry {entry_uuid}")
        raise NotFoundError()
