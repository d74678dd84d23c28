import json
import threading

import pytest
from unittest.mock import AsyncMock

from models import ExtractionMethod
from scraper import course_scraper
from scraper.config import ScraperConfig
from scraper.course_scraper import extract_course, scrape_course, scrape_course_sync
from scraper.exceptions import FetchError, FetchFailureReason, NoEmbeddedData, NoScorecardFound
from scraper.fetcher import RenderedPage
from scraper.strategies import SiteHint, detect_site

BLUEGOLF_URL = "https://course.bluegolf.com/bluegolf/course/course/oakmont/detailedscorecard.htm"
GENERIC_URL = "https://www.examplegolfclub.com/scorecard"


# ================================================================
# Fixtures
# ================================================================

def _generic_table_html():
    rows = "".join(f"<tr><td>{n}</td><td>{350 + n}</td><td>4</td></tr>" for n in range(1, 10))
    return (
        "<html><head><title>Example Golf Club - Scorecard</title></head><body>"
        f"<table><tr><th>Hole</th><th>Blue</th><th>Par</th></tr>{rows}</table></body></html>"
    )


def _provider_table_html():
    rows = "".join(f"<tr><td>{n}</td><td>{400 + n}</td><td>4</td><td>{n}</td></tr>" for n in range(1, 10))
    return f"<html><head><title>Oakmont | BlueGolf</title></head><body><table>{rows}</table></body></html>"


def _embedded_script():
    tees = [{"name": "Black", "holes": [{"holeNumber": n, "par": 4, "length": 420} for n in range(1, 19)]}]
    return "window.scorecard = " + json.dumps({"course": {"name": "Oakmont CC", "tees": tees}}) + ";"


def _fake_fetcher(page: RenderedPage) -> AsyncMock:
    return AsyncMock(return_value=page)


# ================================================================
# Site detection
# ================================================================

def test_detect_site():
    assert detect_site(BLUEGOLF_URL) == SiteHint.BLUEGOLF
    assert detect_site("https://COURSE.BlueGolf.com/x") == SiteHint.BLUEGOLF
    assert detect_site(GENERIC_URL) == SiteHint.GENERIC
    assert detect_site(GENERIC_URL, SiteHint.BLUEGOLF) == SiteHint.BLUEGOLF


# ================================================================
# Strategy orchestration
# ================================================================

@pytest.mark.asyncio
async def test_generic_url_uses_table_strategy():
    page = RenderedPage(url=GENERIC_URL, html=_generic_table_html(), script_contents=[_embedded_script()])
    fetcher = _fake_fetcher(page)

    doc = await scrape_course(GENERIC_URL, fetcher=fetcher)

    assert doc.extraction_method == ExtractionMethod.GENERIC_TABLE
    assert doc.name == "Example Golf Club"
    assert doc.hole_count == 9
    fetcher.assert_awaited_once_with(GENERIC_URL, None)


@pytest.mark.asyncio
async def test_provider_url_prefers_embedded_json():
    page = RenderedPage(
        url=BLUEGOLF_URL,
        html=_provider_table_html(),
        script_contents=["var analytics = {};", _embedded_script()],
        page_title="Oakmont | BlueGolf",
    )
    doc = await scrape_course(BLUEGOLF_URL, fetcher=_fake_fetcher(page))

    assert doc.extraction_method == ExtractionMethod.EMBEDDED_JSON
    assert doc.name == "Oakmont CC"
    assert doc.hole_count == 18
    assert doc.total_par == 72
    assert doc.total_yardage == {"Black": 18 * 420}


@pytest.mark.asyncio
async def test_provider_url_falls_back_to_dom():
    page = RenderedPage(
        url=BLUEGOLF_URL,
        html=_provider_table_html(),
        script_contents=['{"tees": []}'],
        page_title="Oakmont | BlueGolf",
    )
    doc = await scrape_course(BLUEGOLF_URL, fetcher=_fake_fetcher(page))

    assert doc.extraction_method == ExtractionMethod.DOM_FALLBACK
    assert doc.name == "Oakmont"
    assert doc.get_hole(2).yardages == {"white": 402}
    assert doc.get_hole(2).stroke_index == 2


@pytest.mark.asyncio
async def test_provider_failure_reports_last_strategy_error():
    page = RenderedPage(url=BLUEGOLF_URL, html="<html></html>", script_contents=[])
    with pytest.raises(NoScorecardFound):
        await scrape_course(BLUEGOLF_URL, fetcher=_fake_fetcher(page))


@pytest.mark.asyncio
async def test_fetch_error_propagates_without_extraction():
    fetcher = AsyncMock(side_effect=FetchError(FetchFailureReason.NAVIGATION_TIMEOUT, "too slow"))
    with pytest.raises(FetchError) as exc_info:
        await scrape_course(GENERIC_URL, fetcher=fetcher)
    assert exc_info.value.reason == FetchFailureReason.NAVIGATION_TIMEOUT
    fetcher.assert_awaited_once()


@pytest.mark.asyncio
async def test_config_is_passed_to_fetcher():
    page = RenderedPage(url=GENERIC_URL, html=_generic_table_html())
    fetcher = _fake_fetcher(page)
    cfg = ScraperConfig(navigation_timeout_ms=5000)

    await scrape_course(GENERIC_URL, config=cfg, fetcher=fetcher)
    fetcher.assert_awaited_once_with(GENERIC_URL, cfg)


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "   ", "not a url", "ftp://example.com/card"])
async def test_invalid_urls_are_rejected(url):
    fetcher = AsyncMock()
    with pytest.raises(ValueError):
        await scrape_course(url, fetcher=fetcher)
    fetcher.assert_not_awaited()


@pytest.mark.asyncio
async def test_extraction_runs_off_the_event_loop_thread(monkeypatch):
    page = RenderedPage(url=GENERIC_URL, html=_generic_table_html())
    loop_thread = threading.get_ident()
    seen_threads = []
    real_extract = course_scraper.extract_course

    def recording_extract(p, site):
        seen_threads.append(threading.get_ident())
        return real_extract(p, site)

    monkeypatch.setattr(course_scraper, "extract_course", recording_extract)

    doc = await scrape_course(GENERIC_URL, fetcher=_fake_fetcher(page))

    assert doc.hole_count == 9
    assert seen_threads and seen_threads[0] != loop_thread


def test_non_finite_embedded_data_falls_back_to_dom():
    poisoned = 'window.card = {"tees":[{"name":"White","holes":[{"holeNumber":1,"par":4,"length":Infinity}]}]};'
    page = RenderedPage(
        url=BLUEGOLF_URL,
        html=_provider_table_html(),
        script_contents=[poisoned],
        page_title="Oakmont | BlueGolf",
    )
    doc = extract_course(page, SiteHint.BLUEGOLF)

    assert doc.extraction_method == ExtractionMethod.DOM_FALLBACK
    assert doc.hole_count == 9


def test_extract_course_without_fetch():
    page = RenderedPage(url=BLUEGOLF_URL, html="", script_contents=[_embedded_script()])
    doc = extract_course(page, SiteHint.BLUEGOLF)
    assert doc.extraction_method == ExtractionMethod.EMBEDDED_JSON


def test_generic_strategy_ignores_embedded_data():
    page = RenderedPage(url=GENERIC_URL, html="<html></html>", script_contents=[_embedded_script()])
    with pytest.raises(NoScorecardFound):
        extract_course(page, SiteHint.GENERIC)


def test_scrape_course_sync():
    page = RenderedPage(url=GENERIC_URL, html=_generic_table_html())
    doc = scrape_course_sync(GENERIC_URL, fetcher=_fake_fetcher(page))
    assert doc.hole_count == 9


# ================================================================
# Config
# ================================================================

def test_config_from_env(monkeypatch):
    monkeypatch.setenv("BROWSER_EXECUTABLE_PATH", "/opt/chrome/chrome")
    monkeypatch.setenv("SCRAPER_NAVIGATION_TIMEOUT_MS", "15000")
    monkeypatch.setenv("SCRAPER_HEADLESS", "false")
    monkeypatch.setenv("SCRAPER_USER_AGENT", "TestAgent/1.0")

    cfg = ScraperConfig.from_env()
    assert cfg.browser_executable_path == "/opt/chrome/chrome"
    assert cfg.navigation_timeout_ms == 15000
    assert cfg.headless is False
    assert cfg.user_agent == "TestAgent/1.0"


def test_config_defaults(monkeypatch):
    for name in ("BROWSER_EXECUTABLE_PATH", "CHROME_BIN", "SCRAPER_NAVIGATION_TIMEOUT_MS",
                 "SCRAPER_HEADLESS", "SCRAPER_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)

    cfg = ScraperConfig.from_env()
    assert cfg.browser_executable_path is None
    assert cfg.navigation_timeout_ms == 30000
    assert cfg.headless is True
    assert "Mozilla/5.0" in cfg.user_agent


def test_config_chrome_bin_fallback(monkeypatch):
    monkeypatch.delenv("BROWSER_EXECUTABLE_PATH", raising=False)
    monkeypatch.setenv("CHROME_BIN", "/usr/bin/chromium")
    assert ScraperConfig.from_env().browser_executable_path == "/usr/bin/chromium"


def test_config_rejects_bad_timeout(monkeypatch):
    monkeypatch.setenv("SCRAPER_NAVIGATION_TIMEOUT_MS", "soon")
    with pytest.raises(ValueError):
        ScraperConfig.from_env()
