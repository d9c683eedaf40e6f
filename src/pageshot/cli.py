from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Mapping

from .adapters.playwright import take_screenshot
from .config.settings import load_settings

logger = logging.getLogger(__name__)


def _error_message(exc: BaseException) -> str:
    # Playwright appends a multi-line call log to its messages
    for line in str(exc).splitlines():
        if line.strip():
            return line.strip()
    return type(exc).__name__


def _log_level(name: str) -> int:
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def main(environ: Mapping[str, str] | None = None) -> int:
    """Capture one screenshot and return the process exit status."""
    try:
        settings = load_settings(environ)
        logging.basicConfig(
            level=_log_level(settings.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        asyncio.run(take_screenshot(settings.url, settings.out, headless=settings.headless))
    except Exception as e:
        logger.debug("Capture failed", exc_info=True)
        print(f"Screenshot failed: {_error_message(e)}", file=sys.stderr)
        return 1

    print(f"Saved screenshot to {settings.out}")
    return 0


def run() -> None:
    sys.exit(main())
