from enum import Enum
from typing import Optional


BLUEGOLF_DOMAIN = "bluegolf.com"


class SiteHint(str, Enum):
    """Which family of extraction strategies to run for a page."""
    GENERIC = "generic"    # Any scorecard page: HTML table heuristics
    BLUEGOLF = "bluegolf"  # Provider page: embedded JSON, then DOM fallback


def detect_site(url: str, hint: Optional[SiteHint] = None) -> SiteHint:
    """Pick the strategy family for a URL. An explicit hint always wins."""
    if hint is not None:
        return hint
    if BLUEGOLF_DOMAIN in url.lower():
        return SiteHint.BLUEGOLF
    return SiteHint.GENERIC
