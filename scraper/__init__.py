from .course_scraper import extract_course, scrape_course, scrape_course_sync
from .config import ScraperConfig
from .strategies import SiteHint, detect_site
from .fetcher import RenderedPage, fetch_page, resolve_browser_executable
from .table_extractor import extract_from_tables
from .embedded_extractor import extract_from_scripts
from .dom_fallback import extract_from_dom_fallback
from .assembler import assemble
from .exceptions import (
    ScraperError,
    FetchError,
    FetchFailureReason,
    ExtractionError,
    NoScorecardFound,
    NoEmbeddedData,
)

__all__ = [
    "extract_course",
    "scrape_course",
    "scrape_course_sync",
    "ScraperConfig",
    "SiteHint",
    "detect_site",
    "RenderedPage",
    "fetch_page",
    "resolve_browser_executable",
    "extract_from_tables",
    "extract_from_scripts",
    "extract_from_dom_fallback",
    "assemble",
    "ScraperError",
    "FetchError",
    "FetchFailureReason",
    "ExtractionError",
    "NoScorecardFound",
    "NoEmbeddedData",
]
