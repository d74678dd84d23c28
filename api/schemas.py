"""Request/response models for the scrape endpoint."""

from pydantic import BaseModel


class ScrapeRequest(BaseModel):
    url: str


class ScrapeResponse(BaseModel):
    """Scraped course, serialized for the client."""
    success: bool = True
    course: dict
    source_url: str
