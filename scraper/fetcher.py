"""Headless-browser page fetching (Playwright, Chromium)."""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright
from pydantic import BaseModel, Field

from scraper.config import ScraperConfig
from scraper.exceptions import FetchError, FetchFailureReason

logger = logging.getLogger(__name__)

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
]

_SCRIPT_TEXT_JS = "elements => elements.map(e => e.textContent || '')"


class RenderedPage(BaseModel):
    """A page after JavaScript has run and the network has gone quiet."""
    url: str
    html: str
    script_contents: List[str] = Field(default_factory=list)
    page_title: str = ""


def _known_browser_locations() -> List[str]:
    """Well-known Chrome/Chromium install paths for the current OS family."""
    if sys.platform.startswith("win"):
        paths = [
            r"C:\Program Files\Google\Chrome\Application\chrome.exe",
            r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
        ]
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            paths.append(os.path.join(local_app_data, "Google", "Chrome", "Application", "chrome.exe"))
        return paths
    if sys.platform == "darwin":
        return [
            "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
            "/Applications/Chromium.app/Contents/MacOS/Chromium",
        ]
    return [
        "/usr/bin/google-chrome",
        "/usr/bin/google-chrome-stable",
        "/usr/bin/chromium",
        "/usr/bin/chromium-browser",
    ]


def resolve_browser_executable(config: ScraperConfig) -> Optional[str]:
    """Pick the browser binary to launch.

    Returns None to let Playwright use its own bundled Chromium.

    Raises:
        FetchError: launch_failed, if an explicitly configured path does not exist.
    """
    if config.browser_executable_path:
        if not Path(config.browser_executable_path).exists():
            raise FetchError(
                FetchFailureReason.LAUNCH_FAILED,
                f"Configured browser not found: {config.browser_executable_path}",
            )
        return config.browser_executable_path

    for candidate in _known_browser_locations():
        if Path(candidate).exists():
            return candidate
    return None


async def _close_browser(browser) -> None:
    try:
        await browser.close()
    except PlaywrightError as e:
        logger.warning("Browser did not close cleanly: %s", e)


async def fetch_page(url: str, config: Optional[ScraperConfig] = None) -> RenderedPage:
    """Render a page in a fresh headless browser and return its markup.

    One browser per call; it is closed on every exit path.

    Raises:
        FetchError: launch_failed, navigation_timeout or navigation_error.
    """
    config = config or ScraperConfig.from_env()
    executable_path = resolve_browser_executable(config)

    # Browser-side failures are already FetchErrors; anything left came from the driver
    try:
        async with async_playwright() as p:
            return await _render(p, url, config, executable_path)
    except PlaywrightError as e:
        raise FetchError(FetchFailureReason.LAUNCH_FAILED, f"Playwright driver failed: {e}") from e


async def _render(p, url: str, config: ScraperConfig, executable_path: Optional[str]) -> RenderedPage:
    logger.info("Launching browser for %s", url)
    try:
        browser = await p.chromium.launch(
            headless=config.headless,
            executable_path=executable_path,
            args=BROWSER_ARGS,
        )
    except PlaywrightError as e:
        raise FetchError(FetchFailureReason.LAUNCH_FAILED, str(e)) from e

    try:
        context = await browser.new_context(user_agent=config.user_agent)
        page = await context.new_page()
        logger.debug("Navigating to %s", url)
        await page.goto(url, wait_until="networkidle", timeout=config.navigation_timeout_ms)
        html = await page.content()
        title = await page.title()
        scripts = await page.eval_on_selector_all("script", _SCRIPT_TEXT_JS)
        return RenderedPage(url=url, html=html, script_contents=scripts, page_title=title)
    except PlaywrightTimeoutError as e:
        raise FetchError(
            FetchFailureReason.NAVIGATION_TIMEOUT,
            f"{url} did not settle within {config.navigation_timeout_ms} ms",
        ) from e
    except PlaywrightError as e:
        raise FetchError(FetchFailureReason.NAVIGATION_ERROR, str(e)) from e
    finally:
        await _close_browser(browser)
