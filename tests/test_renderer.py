import asyncio

import pytest

from diary.core.config import Settings
from diary.domains.export import renderer as renderer_module
from diary.domains.export.renderer import (
    ChromiumEngine,
    CorruptOutputError,
    EngineLaunchError,
    PdfRenderer,
    RenderError,
    RenderTimeoutError,
)

VALID_PDF = b"%PDF-1.4\n" + b"1" * 4096


class FakePage:
    def __init__(self, pdf=VALID_PDF, load_delay=0.0, pdf_delay=0.0):
        self._pdf = pdf
        self.load_delay = load_delay
        self.pdf_delay = pdf_delay
        self.html = None
        self.pdf_options = None

    async def set_content(self, html, **kwargs):
        self.html = html
        if self.load_delay:
            await asyncio.sleep(self.load_delay)

    async def pdf(self, **kwargs):
        self.pdf_options = kwargs
        if self.pdf_delay:
            await asyncio.sleep(self.pdf_delay)
        return self._pdf


class FakeEngine:
    def __init__(self, page=None, fail_start=False, fail_close=False):
        self.page = page or FakePage()
        self.fail_start = fail_start
        self.fail_close = fail_close
        self.started = False
        self.close_calls = 0

    async def start(self):
        if self.fail_start:
            raise OSError("chromium executable not found")
        self.started = True

    async def new_page(self):
        return self.page

    async def close(self):
        self.close_calls += 1
        if self.fail_close:
            raise RuntimeError("browser already gone")


def make_renderer(engine, **kwargs):
    options = {"load_timeout": 0.05, "render_timeout": 0.05}
    options.update(kwargs)
    return PdfRenderer(engine_factory=lambda: engine, **options)


async def test_render_returns_pdf_and_releases_engine():
    engine = FakeEngine()
    pdf = await make_renderer(engine).render("<html><body>hi</body></html>")

    assert pdf == VALID_PDF
    assert engine.page.html == "<html><body>hi</body></html>"
    assert engine.page.pdf_options["format"] == "A4"
    assert engine.page.pdf_options["margin"] == {
        "top": "20mm", "right": "20mm", "bottom": "20mm", "left": "20mm"
    }
    assert engine.close_calls == 1


async def test_each_render_gets_its_own_engine():
    engines = []

    def factory():
        engines.append(FakeEngine())
        return engines[-1]

    renderer = PdfRenderer(engine_factory=factory)
    await asyncio.gather(renderer.render("<p>a</p>"), renderer.render("<p>b</p>"))

    assert len(engines) == 2
    assert [engine.close_calls for engine in engines] == [1, 1]


async def test_load_timeout_releases_engine_once():
    engine = FakeEngine(page=FakePage(load_delay=5))

    with pytest.raises(RenderTimeoutError):
        await make_renderer(engine).render("<p>slow</p>")

    assert engine.close_calls == 1


async def test_pdf_timeout_releases_engine_once():
    engine = FakeEngine(page=FakePage(pdf_delay=5))

    with pytest.raises(RenderTimeoutError):
        await make_renderer(engine).render("<p>slow</p>")

    assert engine.close_calls == 1


async def test_launch_failure_is_reported_and_released():
    engine = FakeEngine(fail_start=True)

    with pytest.raises(EngineLaunchError):
        await make_renderer(engine).render("<p>x</p>")

    assert engine.close_calls == 1


async def test_undersized_output_is_rejected():
    engine = FakeEngine(page=FakePage(pdf=b"%PDF-tiny"))

    with pytest.raises(CorruptOutputError):
        await make_renderer(engine).render("<p>x</p>")

    assert engine.close_calls == 1


async def test_close_failure_does_not_hide_result():
    engine = FakeEngine(fail_close=True)
    pdf = await make_renderer(engine).render("<p>x</p>")

    assert pdf == VALID_PDF
    assert engine.close_calls == 1


def test_render_errors_share_a_base_and_codes():
    for error in (EngineLaunchError(), RenderTimeoutError(), CorruptOutputError()):
        assert isinstance(error, RenderError)
    assert RenderTimeoutError().to_body() == {"error": "PDF generation timed out", "code": "render_timeout"}
    assert RenderTimeoutError.status_code == 500
    assert EngineLaunchError.status_code == 500


def test_from_settings():
    settings = Settings(pdf_load_timeout_seconds=5, pdf_min_bytes=10, pdf_margin="15mm")
    renderer = PdfRenderer.from_settings(settings)

    assert renderer.load_timeout == 5
    assert renderer.min_bytes == 10
    assert renderer.margin == "15mm"
    assert renderer.page_format == "A4"


class FakeDriver:
    def __init__(self):
        self.stop_calls = 0

    async def stop(self):
        self.stop_calls += 1


class SlowDriverStarter:
    def __init__(self, driver, delay):
        self.driver = driver
        self.delay = delay

    async def start(self):
        await asyncio.sleep(self.delay)
        return self.driver


async def test_driver_started_after_launch_timeout_is_stopped(monkeypatch):
    driver = FakeDriver()
    monkeypatch.setattr(renderer_module, "async_playwright", lambda: SlowDriverStarter(driver, 0.1))
    renderer = PdfRenderer(engine_factory=ChromiumEngine, load_timeout=0.01, render_timeout=0.01)

    with pytest.raises(EngineLaunchError):
        await renderer.render("<p>x</p>")

    assert driver.stop_calls == 1


async def test_driver_that_never_starts_is_abandoned(monkeypatch):
    driver = FakeDriver()
    monkeypatch.setattr(renderer_module, "async_playwright", lambda: SlowDriverStarter(driver, 10))
    engine = ChromiumEngine(close_timeout=0.01)

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(engine.start(), timeout=0.01)
    await engine.close()

    assert driver.stop_calls == 0
