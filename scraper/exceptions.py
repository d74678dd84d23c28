from enum import Enum


class ScraperError(Exception):
    """Base for all scraper errors."""


class FetchFailureReason(str, Enum):
    LAUNCH_FAILED = "launch_failed"
    NAVIGATION_TIMEOUT = "navigation_timeout"
    NAVIGATION_ERROR = "navigation_error"


class FetchError(ScraperError):
    """Browser could not be started or the page could not be loaded."""

    def __init__(self, reason: FetchFailureReason, message: str):
        super().__init__(f"{reason.value}: {message}")
        self.reason = reason
        self.message = message


class ExtractionError(ScraperError):
    """Page was reached but no strategy recognised a scorecard."""


class NoScorecardFound(ExtractionError):
    """No table on the page looks like a scorecard."""


class NoEmbeddedData(ExtractionError):
    """No inline script carries usable course JSON."""
