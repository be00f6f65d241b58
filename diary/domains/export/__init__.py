from diary.domains.export.composer import compose_entry_document, compose_bulk_document
from diary.domains.export.renderer import (
    PdfRenderer, ChromiumEngine, RenderError, EngineLaunchError,
    RenderTimeoutError, CorruptOutputError
)
from diary.domains.export.sanitizer import sanitize_html
from diary.domains.export.services import ExportService

__all__ = [
    "compose_entry_document", "compose_bulk_document",
    "PdfRenderer", "ChromiumEngine", "RenderError", "EngineLaunchError",
    "RenderTimeoutError", "CorruptOutputError",
    "sanitize_html",
    "ExportService"
]
