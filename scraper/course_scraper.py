import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Tuple
from urllib.parse import urlparse

from models import CourseDocument
from scraper.config import ScraperConfig
from scraper.dom_fallback import extract_from_dom_fallback
from scraper.embedded_extractor import extract_from_scripts
from scraper.exceptions import ExtractionError
from scraper.fetcher import RenderedPage, fetch_page
from scraper.strategies import SiteHint, detect_site
from scraper.table_extractor import extract_from_tables

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, Optional[ScraperConfig]], Awaitable[RenderedPage]]
Extractor = Callable[[RenderedPage], CourseDocument]


# --- Strategies ---

def _embedded(page: RenderedPage) -> CourseDocument:
    return extract_from_scripts(page.script_contents, page.page_title, page.url)


def _tables(page: RenderedPage) -> CourseDocument:
    return extract_from_tables(page.html, page.url)


STRATEGIES = {
    SiteHint.BLUEGOLF: [("embedded_json", _embedded), ("dom_fallback", extract_from_dom_fallback)],
    SiteHint.GENERIC: [("generic_table", _tables)],
}


def _validate_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise ValueError("URL is required")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"URL must be an absolute http(s) address: {url}")
    return url


def extract_course(page: RenderedPage, site: SiteHint) -> CourseDocument:
    """Run the strategies for a site in order; the first success wins.

    Raises:
        ExtractionError: The last strategy's failure, if none succeeds.
    """
    strategies: List[Tuple[str, Extractor]] = STRATEGIES[site]
    last_error: Optional[ExtractionError] = None
    for name, strategy in strategies:
        try:
            course = strategy(page)
        except ExtractionError as e:
            logger.warning("Strategy %s failed for %s: %s", name, page.url, e)
            last_error = e
            continue
        logger.info("Strategy %s succeeded for %s", name, page.url)
        return course
    raise last_error


# --- Public API ---

async def scrape_course(
    url: str,
    *,
    site: Optional[SiteHint] = None,
    config: Optional[ScraperConfig] = None,
    fetcher: Fetcher = fetch_page,
) -> CourseDocument:
    """Scrape a course scorecard from a web page.

    Args:
        url: Absolute http(s) URL of the scorecard page.
        site: Strategy family to use. Detected from the URL when omitted:
            - BLUEGOLF: embedded JSON first, then the DOM fallback
            - GENERIC: HTML table heuristics
        config: Browser settings. Read from the environment when omitted.
        fetcher: Page renderer; replaceable for tests.

    Returns:
        The assembled CourseDocument.

    Raises:
        ValueError: If the URL is empty or not http(s).
        FetchError: If the browser cannot start or the page cannot be loaded.
        ExtractionError: If no strategy finds a scorecard on the page.
    """
    url = _validate_url(url)
    site = detect_site(url, site)
    logger.info("Scraping %s (site=%s)", url, site.value)

    page = await fetcher(url, config)

    # Parsing is CPU-bound; keep it off the event loop
    loop = asyncio.get_running_loop()
    course = await loop.run_in_executor(None, extract_course, page, site)

    logger.info(
        "Scraped %d holes from %s: par %d, tees %s",
        course.hole_count, course.name, course.total_par, ", ".join(course.tee_keys) or "none",
    )
    return course


def scrape_course_sync(url: str, **kwargs) -> CourseDocument:
    """Blocking wrapper around scrape_course for scripts and notebooks."""
    return asyncio.run(scrape_course(url, **kwargs))
