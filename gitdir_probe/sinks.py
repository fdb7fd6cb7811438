"""What happens to a domain once both checks pass.

Two policies, one per run: append the domain to a text file, or render the
site with a headless browser and keep the PNG. Both guard their write path
with a lock; the lock is never held while talking to the network.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from playwright.async_api import async_playwright

from .config import SCREENSHOT_TIMEOUT, VIEWPORT

logger = logging.getLogger(__name__)


class ResultSink(Protocol):
    """Interface the workers write positives through."""

    async def record(self, domain: str) -> None:
        ...


@dataclass(frozen=True)
class ScreenshotRecord:
    domain: str
    image_path: str


def sanitize_filename(domain):
    """https://example.com -> https_example.com

    Path separators and colons left after the scheme (ports, paths) are
    replaced too so the result always stays inside the output directory.
    """
    name = domain.replace("://", "_")
    for ch in ("/", "\\", ":"):
        name = name.replace(ch, "_")
    return name


class FileSink:
    """Appends one verified domain per line. The file is truncated on open."""

    def __init__(self, path):
        self.path = Path(path)
        self.count = 0
        self._fh = None
        self._lock = asyncio.Lock()

    async def __aenter__(self):
        # OSError here is fatal for the run, the CLI reports it
        self._fh = open(self.path, "w", encoding="utf-8")
        return self

    async def __aexit__(self, *exc):
        self._fh.close()

    async def record(self, domain):
        async with self._lock:
            await self._append(f"{domain}\n")
            self.count += 1

    async def _append(self, line):
        await asyncio.to_thread(self._write, line)

    def _write(self, line):
        self._fh.write(line)
        self._fh.flush()


class PlaywrightRenderer:
    """Headless Chromium shared by all workers, one page per capture."""

    def __init__(self, timeout=SCREENSHOT_TIMEOUT, viewport=None):
        self.timeout = timeout
        self.viewport = viewport or VIEWPORT
        self._playwright = None
        self._browser = None

    async def __aenter__(self):
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=True)
        except BaseException:
            await self._playwright.stop()
            raise
        return self

    async def __aexit__(self, *exc):
        await self._browser.close()
        await self._playwright.stop()

    async def render(self, url):
        return await asyncio.wait_for(self._render(url), self.timeout)

    async def _render(self, url):
        timeout_ms = self.timeout * 1000
        page = await self._browser.new_page(viewport=self.viewport, ignore_https_errors=True)
        try:
            await page.goto(url, timeout=timeout_ms)
            await page.wait_for_selector("body", state="visible", timeout=timeout_ms)
            return await page.locator("body").screenshot(timeout=timeout_ms)
        finally:
            await page.close()


class ScreenshotSink:
    """Captures the root page of each positive and records {domain, path}.

    Capture and write failures are reported and swallowed: the domain just
    ends up without an artifact.
    """

    def __init__(self, output_dir, renderer):
        self.output_dir = Path(output_dir)
        self.renderer = renderer
        self.records = []
        self._lock = asyncio.Lock()

    async def __aenter__(self):
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self

    async def __aexit__(self, *exc):
        return None

    async def record(self, domain):
        try:
            png = await self.renderer.render(domain)
        except Exception as e:
            print(f"[ERROR] Could not capture screenshot of {domain}: {e!r}")
            logger.debug("render of %s failed", domain, exc_info=True)
            return None

        path = self.output_dir / f"{sanitize_filename(domain)}.png"
        async with self._lock:
            try:
                await asyncio.to_thread(path.write_bytes, png)
            except OSError as e:
                print(f"[ERROR] Could not save screenshot of {domain}: {e}")
                return None
            rec = ScreenshotRecord(domain=domain, image_path=str(path))
            self.records.append(rec)

        print(f"[SCREENSHOT] Screenshot saved: {path}")
        return rec
