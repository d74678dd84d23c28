"""Scorecard scraping API endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from api.schemas import ScrapeRequest, ScrapeResponse
from scraper import course_scraper
from scraper.exceptions import ExtractionError, FetchError, FetchFailureReason

logger = logging.getLogger(__name__)

router = APIRouter()

_FETCH_STATUS = {
    FetchFailureReason.LAUNCH_FAILED: 500,
    FetchFailureReason.NAVIGATION_ERROR: 502,
    FetchFailureReason.NAVIGATION_TIMEOUT: 504,
}


@router.post("/scrape-url", response_model=ScrapeResponse)
async def scrape_url(req: ScrapeRequest):
    """Scrape a scorecard page and return the course document."""
    try:
        course = await course_scraper.scrape_course(req.url)
    except ValueError as e:
        raise HTTPException(400, str(e))
    except FetchError as e:
        logger.error("Fetch failed for %s: %s", req.url, e)
        raise HTTPException(_FETCH_STATUS[e.reason], f"Scorecard scraping failed: {e}")
    except ExtractionError as e:
        logger.error("No scorecard found at %s: %s", req.url, e)
        raise HTTPException(422, f"Scorecard scraping failed: {e}")

    return ScrapeResponse(
        course=course.model_dump(mode="json"),
        source_url=course.source_url,
    )
