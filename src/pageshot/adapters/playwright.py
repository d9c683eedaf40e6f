"""Full-page screenshot capture on top of async Playwright.

One call launches Chromium, loads the page, waits for the network to go idle,
grows the viewport to the document height and writes a PNG clipped to
1280 x min(height, 20000). The browser is owned by a single scoped session
and closed on every exit path.
"""

from __future__ import annotations

import io
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image
from playwright.async_api import async_playwright

from ..runtime.storage import ensure_dir, write_artifact

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from playwright.async_api import Page

logger = logging.getLogger(__name__)

NAVIGATION_TIMEOUT_MS = 60_000
VIEWPORT_WIDTH = 1280
INITIAL_VIEWPORT_HEIGHT = 800
DEVICE_SCALE_FACTOR = 1
FALLBACK_CONTENT_HEIGHT = 2000
MAX_CAPTURE_HEIGHT = 20_000

# Playwright: no network connections for at least 500 ms
WAIT_UNTIL = "networkidle"

_BODY_HEIGHT_JS = "() => (document.body ? document.body.scrollHeight : 0)"


@dataclass
class CaptureResult:
    url: str
    path: Path
    viewport_width: int
    viewport_height: int
    image_width: int
    image_height: int


@asynccontextmanager
async def browser_page(headless: bool = True) -> AsyncGenerator[Page, None]:
    """Yield a fresh page in a newly launched Chromium.

    The page starts with a 1280x800 viewport at device-scale factor 1 and a
    60 s navigation timeout. The browser is closed exactly once when the
    block exits, whether it returns or raises.
    """
    async with async_playwright() as p:
        logger.debug("Launching chromium (headless=%s)", headless)
        browser = await p.chromium.launch(headless=headless)
        try:
            context = await browser.new_context(
                viewport={"width": VIEWPORT_WIDTH, "height": INITIAL_VIEWPORT_HEIGHT},
                device_scale_factor=DEVICE_SCALE_FACTOR,
            )
            page = await context.new_page()
            page.set_default_navigation_timeout(NAVIGATION_TIMEOUT_MS)
            yield page
        finally:
            await browser.close()
            logger.debug("Browser closed")


async def content_height(page: Page) -> int:
    """Return the rendered body height, or the fallback when it is missing or zero."""
    height = await page.evaluate(_BODY_HEIGHT_JS)
    if not height:
        logger.info("Content height unavailable, using %d", FALLBACK_CONTENT_HEIGHT)
        return FALLBACK_CONTENT_HEIGHT
    return int(height)


def capture_height(measured: int) -> int:
    return min(measured, MAX_CAPTURE_HEIGHT)


def _png_size(png_bytes: bytes) -> tuple[int, int]:
    with Image.open(io.BytesIO(png_bytes)) as img:
        return img.width, img.height


async def take_screenshot(url: str, out_path: Path, headless: bool = True) -> CaptureResult:
    async with browser_page(headless=headless) as page:
        logger.info("Navigating to %s", url)
        await page.goto(url, wait_until=WAIT_UNTIL)

        height = capture_height(await content_height(page))
        await page.set_viewport_size({"width": VIEWPORT_WIDTH, "height": height})

        ensure_dir(out_path.parent)
        # Full-page coordinates; keeps the image at 1280 x clamped height
        png = await page.screenshot(
            full_page=True,
            type="png",
            clip={"x": 0, "y": 0, "width": VIEWPORT_WIDTH, "height": height},
        )
        write_artifact(out_path, png)

    image_width, image_height = _png_size(png)
    logger.info("Wrote %s (%dx%d)", out_path, image_width, image_height)
    return CaptureResult(
        url=url,
        path=out_path,
        viewport_width=VIEWPORT_WIDTH,
        viewport_height=height,
        image_width=image_width,
        image_height=image_height,
    )
