import io
import os
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from PIL import Image

# Ensure src/ is importable when running pytest without installation
_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


def pytest_sessionstart(session):  # noqa: ARG001
    os.environ.setdefault("HEADLESS", "true")


def _png(width: int, height: int) -> bytes:
    buf = io.BytesIO()
    Image.new("1", (width, height), 1).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_png():
    return _png


@pytest.fixture
def fake_browser():
    """Patch async_playwright with a mock chain: playwright -> browser -> context -> page."""
    page = MagicMock()
    page.goto = AsyncMock(return_value=None)
    page.evaluate = AsyncMock(return_value=3000)
    page.set_viewport_size = AsyncMock(return_value=None)
    page.screenshot = AsyncMock(return_value=_png(1280, 3000))

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock(return_value=None)

    pw = MagicMock()
    pw.chromium.launch = AsyncMock(return_value=browser)

    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=pw)
    manager.__aexit__ = AsyncMock(return_value=False)

    with patch("pageshot.adapters.playwright.async_playwright", return_value=manager):
        yield SimpleNamespace(
            manager=manager, playwright=pw, browser=browser, context=context, page=page
        )
