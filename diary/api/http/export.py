from typing import Optional
import uuid

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from diary.core.auth import get_current_user
from diary.core.db import get_db
from diary.domains.entries.schemas import BulkExportRequest
from diary.domains.export.renderer import PdfRenderer
from diary.domains.export.services import ExportService
from diary.domains.identity.entities import User

router = APIRouter(prefix="/entries", tags=["export"])


def get_renderer(request: Request) -> PdfRenderer:
    """Renderer configured for the running app"""
    return request.app.state.renderer


def pdf_response(pdf_bytes: bytes, filename: str) -> Response:
    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "Content-Length": str(len(pdf_bytes)),
        "Cache-Control": "no-store, no-cache, must-revalidate",
        "Pragma": "no-cache",
        "Expires": "0",
        "X-Content-Type-Options": "nosniff",
    }
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)


@router.post("/export-bulk")
async def export_bulk(
    export_request: BulkExportRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    renderer: PdfRenderer = Depends(get_renderer)
):
    """Export several entries into one PDF"""
    filename, pdf_bytes = await ExportService(db, renderer).export_entries(
        export_request.entry_ids,
        current_user.uuid,
        export_request.passcodes
    )
    return pdf_response(pdf_bytes, filename)


@router.get("/{entry_id}/export")
async def export_entry(
    entry_id: uuid.UUID,
    passcode: Optional[str] = Query(None, max_length=128),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    renderer: PdfRenderer = Depends(get_renderer)
):
    """Export one entry as PDF"""
    filename, pdf_bytes = await ExportService(db, renderer).export_entry(
        entry_id,
        current_user.uuid,
        passcode
    )
    return pdf_response(pdf_bytes, filename)
