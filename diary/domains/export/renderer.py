import asyncio
import logging
import time
from typing import Callable, Optional

from playwright.async_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from diary.core.config import Settings
from diary.core.errors import DiaryError


class RenderError(DiaryError):
    """PDF generation failed"""

    code = "render_failed"
    message = "Failed to generate PDF"

    def to_body(self) -> dict:
        return {"error": self.message, "code": self.code}


class EngineLaunchError(RenderError):
    code = "engine_launch_failed"
    message = "PDF engine could not be started"


class RenderTimeoutError(RenderError):
    code = "render_timeout"
    message = "PDF generation timed out"


class CorruptOutputError(RenderError):
    code = "corrupt_output"
    message = "Generated PDF appears to be corrupted"


class ChromiumEngine:
    """Headless Chromium driven through Playwright, one process per export"""

    def __init__(self, close_timeout: float = 10.0):
        self.close_timeout = close_timeout
        self._startup = None
        self._playwright = None
        self._browser = None

    async def start(self) -> None:
        # Own task, so close() can stop a driver whose start outlived the caller
        self._startup = asyncio.ensure_future(async_playwright().start())
        self._playwright = await asyncio.shield(self._startup)
        self._browser = await self._playwright.chromium.launch(headless=True)

    async def new_page(self):
        return await self._browser.new_page()

    async def close(self) -> None:
        if self._playwright is None and self._startup is not None:
            self._playwright = await self._finish_startup()
        self._startup = None
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None

    async def _finish_startup(self):
        """Driver handle from an interrupted start(), None if it never came up"""
        try:
            return await asyncio.wait_for(self._startup, timeout=self.close_timeout)
        except (asyncio.TimeoutError, PlaywrightError, OSError):
            return None


class PdfRenderer:
    """Turns a composed HTML document into PDF bytes.

    Every call to render() acquires its own engine and releases it exactly once
    in a finally block, whatever happens in between. Launching, loading the
    document and printing are each bounded by a timeout.
    """

    def __init__(
        self,
        engine_factory: Callable[[], object] = ChromiumEngine,
        load_timeout: float = 30.0,
        render_timeout: float = 30.0,
        min_bytes: int = 1000,
        page_format: str = "A4",
        margin: str = "20mm",
        logger: Optional[logging.Logger] = None
    ):
        self.engine_factory = engine_factory
        self.load_timeout = load_timeout
        self.render_timeout = render_timeout
        self.min_bytes = min_bytes
        self.page_format = page_format
        self.margin = margin
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "PdfRenderer":
        return cls(
            load_timeout=settings.pdf_load_timeout_seconds,
            render_timeout=settings.pdf_render_timeout_seconds,
            min_bytes=settings.pdf_min_bytes,
            page_format=settings.pdf_page_format,
            margin=settings.pdf_margin,
            **kwargs
        )

    async def render(self, html: str) -> bytes:
        started = time.monotonic()
        engine = self.engine_factory()
        try:
            page = await self._launch(engine)
            await self._load(page, html)
            pdf_bytes = await self._print(page)
        finally:
            await self._release(engine)

        if not pdf_bytes or len(pdf_bytes) < self.min_bytes:
            size = len(pdf_bytes) if pdf_bytes else 0
            self.logger.error(f"Rendered PDF is only {size} bytes")
            raise CorruptOutputError()

        elapsed = int((time.monotonic() - started) * 1000)
        self.logger.info(f"Rendered PDF of {len(pdf_bytes)} bytes in {elapsed} ms")
        return pdf_bytes

    async def _launch(self, engine):
        try:
            await asyncio.wait_for(engine.start(), timeout=self.load_timeout)
            return await asyncio.wait_for(engine.new_page(), timeout=self.load_timeout)
        except asyncio.TimeoutError as exc:
            self.logger.error("PDF engine launch timed out")
            raise EngineLaunchError("PDF engine did not start in time") from exc
        except (PlaywrightError, OSError) as exc:
            self.logger.error(f"PDF engine launch failed: {exc}")
            raise EngineLaunchError() from exc

    async def _load(self, page, html: str) -> None:
        try:
            await asyncio.wait_for(
                page.set_content(html, wait_until="load", timeout=self.load_timeout * 1000),
                timeout=self.load_timeout
            )
        except (asyncio.TimeoutError, PlaywrightTimeoutError) as exc:
            self.logger.error(f"Loading export document timed out after {self.load_timeout}s")
            raise RenderTimeoutError() from exc
        except PlaywrightError as exc:
            self.logger.error(f"Loading export document failed: {exc}")
            raise RenderError() from exc

    async def _print(self, page) -> bytes:
        margin = {side: self.margin for side in ("top", "right", "bottom", "left")}
        try:
            return await asyncio.wait_for(
                page.pdf(format=self.page_format, print_background=True, margin=margin),
                timeout=self.render_timeout
            )
        except (asyncio.TimeoutError, PlaywrightTimeoutError) as exc:
            self.logger.error(f"PDF generation timed out after {self.render_timeout}s")
            raise RenderTimeoutError() from exc
        except PlaywrightError as exc:
            self.logger.error(f"PDF generation failed: {exc}")
            raise RenderError() from exc

    async def _release(self, engine) -> None:
        try:
            await engine.close()
        except Exception as exc:
            # Close failures are logged, never raised
            self.logger.warning(f"PDF engine did not close cleanly: {exc}")
