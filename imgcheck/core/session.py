"""
Session Driver - Scoped ownership of the one browser and page of a run.

    async with open_session(executable_path, config) as page:
        ...

The browser is closed exactly once when the block exits, whether it
returned normally or raised.
"""

import json
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from imgcheck.config import CheckerConfig
from imgcheck.errors import LaunchTimeoutError
from imgcheck.utils.logger import get_logger

logger = get_logger(__name__)

# --- Timeouts (ms) ---
LAUNCH_TIMEOUT_MS = 60_000
NAVIGATION_TIMEOUT_MS = 60_000
ACTION_TIMEOUT_MS = 30_000

# Restricted CI containers: no sandbox, no GPU, no background throttling
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
]


def build_launch_options(executable_path: str, headless: bool = True) -> dict:
    return {
        "headless": headless,
        "executable_path": executable_path,
        "args": list(LAUNCH_ARGS),
        "timeout": LAUNCH_TIMEOUT_MS,
    }


@asynccontextmanager
async def open_session(executable_path: str, config: CheckerConfig) -> AsyncIterator[Page]:
    """
    Launch Chromium and yield a single page with run timeouts applied.

    Raises:
        LaunchTimeoutError: If the browser does not start within LAUNCH_TIMEOUT_MS
    """
    options = build_launch_options(executable_path, headless=config.headless)
    logger.info("Launch options: %s", json.dumps(options, indent=2))

    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(**options)
        except PlaywrightTimeoutError as e:
            raise LaunchTimeoutError(
                f"Browser failed to start within {LAUNCH_TIMEOUT_MS // 1000}s: {e}"
            ) from e
        logger.info("Browser launched successfully")

        try:
            page = await browser.new_page()
            page.set_default_navigation_timeout(NAVIGATION_TIMEOUT_MS)
            page.set_default_timeout(ACTION_TIMEOUT_MS)
            yield page
        finally:
            logger.info("Closing browser...")
            await browser.close()
