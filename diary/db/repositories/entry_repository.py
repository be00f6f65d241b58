from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Sequence, Tuple, TYPE_CHECKING
import uuid

from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from diary.core.errors import PersistenceError
from diary.db.models.entry import Entry as EntryModel

if TYPE_CHECKING:
    from diary.domains.entries.entities import Entry

# Sortable fields exposed on the API, mapped to their columns
SORT_COLUMNS = {
    "createdAt": EntryModel.created_at,
    "updatedAt": EntryModel.updated_at,
    "title": EntryModel.title,
    "mood": EntryModel.mood,
}
SORT_ORDERS = ("asc", "desc")


@dataclass
class EntryFilters:
    search: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    sort_by: str = "createdAt"
    sort_order: str = "desc"


class EntryRepository:
    """Repository for diary entries, always scoped to an owner"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: "Entry") -> "Entry":
        db_entry = EntryModel(
            uuid=entry.uuid,
            owner_id=entry.owner_id,
            title=entry.title,
            content=entry.content,
            tags=entry.tags,
            mood=entry.mood,
            passcode_hash=entry.passcode_hash,
            created_at=entry.created_at,
            updated_at=entry.updated_at
        )

        self.session.add(db_entry)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise PersistenceError("Could not store entry") from exc
        await self.session.refresh(db_entry)
        return self._to_domain(db_entry)

    async def get_for_owner(self, entry_uuid: uuid.UUID, owner_id: uuid.UUID) -> Optional["Entry"]:
        """Entry by id, None when missing or owned by someone else"""
        result = await self.session.execute(
            select(EntryModel).where(
                EntryModel.uuid == entry_uuid,
                EntryModel.owner_id == owner_id
            )
        )
        db_entry = result.scalar_one_or_none()
        return self._to_domain(db_entry) if db_entry else None

    async def get_many_for_owner(
        self,
        entry_uuids: Sequence[uuid.UUID],
        owner_id: uuid.UUID
    ) -> List["Entry"]:
        """Owned entries among the given ids, most recent first"""
        if not entry_uuids:
            return []
        result = await self.session.execute(
            select(EntryModel)
            .where(
                EntryModel.uuid.in_(list(entry_uuids)),
                EntryModel.owner_id == owner_id
            )
            .order_by(EntryModel.created_at.desc(), EntryModel.uuid)
        )
        return [self._to_domain(row) for row in result.scalars().all()]

    async def list_for_owner(
        self,
        owner_id: uuid.UUID,
        filters: EntryFilters,
        limit: int = 10,
        offset: int = 0
    ) -> Tuple[List["Entry"], int]:
        """One page of entries plus the total count matching the filters"""
        if filters.sort_by not in SORT_COLUMNS:
            raise ValueError(f"Unsupported sort field: {filters.sort_by}")
        if filters.sort_order not in SORT_ORDERS:
            raise ValueError(f"Unsupported sort order: {filters.sort_order}")

        conditions = [EntryModel.owner_id == owner_id]
        matchers = []
        if filters.search:
            matchers.append(EntryModel.title.icontains(filters.search, autoescape=True))
            matchers.append(EntryModel.content.icontains(filters.search, autoescape=True))
        for tag in filters.tags:
            matchers.append(EntryModel.tags.icontains(tag, autoescape=True))
        if matchers:
            conditions.append(or_(*matchers))

        column = SORT_COLUMNS[filters.sort_by]
        ordering = column.asc() if filters.sort_order == "asc" else column.desc()

        result = await self.session.execute(
            select(EntryModel)
            .where(*conditions)
            .order_by(ordering, EntryModel.uuid)
            .offset(offset)
            .limit(limit)
        )
        entries = [self._to_domain(row) for row in result.scalars().all()]

        total = await self.session.execute(
            select(func.count(EntryModel.uuid)).where(*conditions)
        )
        return entries, total.scalar()

    async def update(self, entry: "Entry") -> "Entry":
        stmt = (
            update(EntryModel)
            .where(
                EntryModel.uuid == entry.uuid,
                EntryModel.owner_id == entry.owner_id
            )
            .values(
                title=entry.title,
                content=entry.content,
                tags=entry.tags,
                mood=entry.mood,
                passcode_hash=entry.passcode_hash,
                updated_at=entry.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_for_owner(entry.uuid, entry.owner_id)

    async def delete(self, entry_uuid: uuid.UUID, owner_id: uuid.UUID) -> bool:
        stmt = delete(EntryModel).where(
            EntryModel.uuid == entry_uuid,
            EntryModel.owner_id == owner_id
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def count_for_owner(self, owner_id: uuid.UUID, since: Optional[datetime] = None) -> int:
        query = select(func.count(EntryModel.uuid)).where(EntryModel.owner_id == owner_id)
        if since is not None:
            query = query.where(EntryModel.created_at >= since)
        result = await self.session.execute(query)
        return result.scalar()

    async def latest_created_at(self, owner_id: uuid.UUID) -> Optional[datetime]:
        result = await self.session.execute(
            select(func.max(EntryModel.created_at)).where(EntryModel.owner_id == owner_id)
        )
        return result.scalar()

    def _to_domain(self, db_entry: EntryModel) -> "Entry":
        from diary.domains.entries.entities import Entry

        return Entry(
            uuid=db_entry.uuid,
            owner_id=db_entry.owner_id,
            title=db_entry.title,
            content=db_entry.content,
            tags=db_entry.tags,
            mood=db_entry.mood,
            passcode_hash=db_entry.passcode_hash,
            created_at=db_entry.created_at,
            updated_at=db_entry.updated_at
        )
