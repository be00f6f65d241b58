import logging
import re
import time
import uuid
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from diary.core.errors import NotFoundError
from diary.db.repositories.entry_repository import EntryRepository
from diary.domains.entries.entities import Entry, EntryAccess, AccessDecision
from diary.domains.entries.services import EntryService
from diary.domains.export.composer import compose_bulk_document, compose_entry_document
from diary.domains.export.renderer import PdfRenderer

_UNSAFE_FILENAME_RE = re.compile(r"[^a-z0-9]")


def entry_filename(title: str) -> str:
    """my_trip_2024.pdf for a title like 'My/Trip:2024'"""
    base = _UNSAFE_FILENAME_RE.sub("_", (title or "").lower()) or "entry"
    return f"{base}.pdf"


def bulk_filename(exported_at: datetime) -> str:
    return f"diary_entries_{exported_at.strftime('%Y-%m-%d')}.pdf"


def parse_entry_ids(raw_ids: Iterable[str]) -> List[uuid.UUID]:
    """Valid UUIDs in first-seen order; anything else is dropped"""
    seen = []
    for raw in raw_ids:
        try:
            value = uuid.UUID(str(raw))
        except ValueError:
            continue
        if value not in seen:
            seen.append(value)
    return seen


class ExportService:
    """Single and bulk PDF export of a user's entries"""

    def __init__(
        self,
        session: AsyncSession,
        renderer: PdfRenderer,
        logger: Optional[logging.Logger] = None
    ):
        self.session = session
        self.renderer = renderer
        self.logger = logger or logging.getLogger(__name__)
        self.entry_service = EntryService(session)
        self.entry_repository = EntryRepository(session)

    async def export_entry(
        self,
        entry_uuid: uuid.UUID,
        user_id: uuid.UUID,
        passcode: Optional[str] = None
    ) -> Tuple[str, bytes]:
        """Filename and PDF bytes for one entry the caller may read"""
        entry = await self.entry_service.open_entry(entry_uuid, user_id, passcode)
        exported_at = datetime.utcnow()

        started = time.monotonic()
        pdf_bytes = await self.renderer.render(compose_entry_document(entry, exported_at))
        self._log_export(user_id, 1, pdf_bytes, started)

        return entry_filename(entry.title), pdf_bytes

    async def export_entries(
        self,
        raw_ids: Iterable[str],
        user_id: uuid.UUID,
        passcodes: Optional[Dict[str, str]] = None
    ) -> Tuple[str, bytes]:
        """Filename and PDF bytes for every readable entry among raw_ids"""
        entries = await self.readable_entries(raw_ids, user_id, passcodes or {})
        if not entries:
            raise NotFoundError("No entries found")
        exported_at = datetime.utcnow()

        started = time.monotonic()
        pdf_bytes = await self.renderer.render(compose_bulk_document(entries, exported_at))
        self._log_export(user_id, len(entries), pdf_bytes, started)

        return bulk_filename(exported_at), pdf_bytes

    async def readable_entries(
        self,
        raw_ids: Iterable[str],
        user_id: uuid.UUID,
        passcodes: Dict[str, str]
    ) -> List[Entry]:
        """Owned entries, most recent first, minus protected ones without a valid passcode"""
        entry_uuids = parse_entry_ids(raw_ids)
        owned = await self.entry_repository.get_many_for_owner(entry_uuids, user_id)

        presented = {}
        for key, value in passcodes.items():
            for parsed in parse_entry_ids([key]):
                presented[parsed] = value

        readable = [
            entry for entry in owned
            if EntryAccess(entry).decide(user_id, presented.get(entry.uuid)) is AccessDecision.GRANTED
        ]
        dropped = len(entry_uuids) - len(readable)
        if dropped:
            self.logger.info(f"Bulk export for {user_id} dropped {dropped} of {len(entry_uuids)} ids")
        return readable

    def _log_export(self, user_id: uuid.UUID, count: int, pdf_bytes: bytes, started: float) -> None:
        elapsed = int((time.monotonic() - started) * 1000)
        self.logger.info(
            f"Exported {count} entries for {user_id}: {len(pdf_bytes)} bytes in {elapsed} ms"
        )
