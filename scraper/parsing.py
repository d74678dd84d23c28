"""Shared helpers for reading numbers and names out of scraped markup."""

import math
import re
from typing import Any, List, Optional

from bs4 import BeautifulSoup, Tag


# --- Accepted value ranges ---

HOLE_RANGE = (1, 18)
PAR_RANGE = (3, 5)
STROKE_INDEX_RANGE = (1, 18)
YARDAGE_RANGE = (50, 700)
FALLBACK_YARDAGE_RANGE = (100, 600)
SLOPE_RANGE = (55, 155)
RATING_RANGE = (55.0, 85.0)

UNKNOWN_COURSE = "Unknown Course"
UNKNOWN_LOCATION = "Unknown Location"
PROVIDER_DEFAULT_NAME = "BlueGolf Course"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)")
_SCORECARD_SUFFIX = re.compile(r"\s*-\s*Scorecard.*$", re.IGNORECASE)
_BRANDING = [
    re.compile(r"\s*[|\-–—]\s*BlueGolf(?:\.com)?.*$", re.IGNORECASE),
    re.compile(r"\bBlueGolf(?:\.com)?\b", re.IGNORECASE),
]


# --- Numbers ---

def parse_int(value: Any) -> Optional[int]:
    """Read a leading integer the way a browser's parseInt does.

    "382" -> 382, " 4 " -> 4, "410 yds" -> 410, "Out" -> None.
    Booleans are rejected; floats are truncated. NaN and infinities are None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = float(value)
        return value if math.isfinite(value) else None
    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def in_range(value: Optional[float], bounds) -> bool:
    if value is None:
        return False
    low, high = bounds
    return low <= value <= high


def accept(value: Optional[int], bounds) -> Optional[int]:
    """Return value if inside bounds, else None (out-of-range means unknown)."""
    return value if in_range(value, bounds) else None


# --- Markup ---

def load_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def row_cells(row: Tag) -> List[Tag]:
    return row.find_all(["td", "th"])


def cell_text(cell: Optional[Tag]) -> str:
    if cell is None:
        return ""
    return cell.get_text(" ", strip=True)


def page_title(soup: BeautifulSoup) -> str:
    title = soup.find("title")
    return title.get_text(strip=True) if title else ""


def first_heading(soup: BeautifulSoup) -> str:
    h1 = soup.find("h1")
    return h1.get_text(" ", strip=True) if h1 else ""


# --- Names ---

def strip_scorecard_suffix(title: str) -> str:
    """'Pine Valley - Scorecard | Site' -> 'Pine Valley'."""
    return _SCORECARD_SUFFIX.sub("", title or "").strip()


def strip_provider_branding(title: str) -> str:
    """Remove BlueGolf branding and any scorecard suffix from a page title."""
    name = strip_scorecard_suffix(title)
    for pattern in _BRANDING:
        name = pattern.sub("", name)
    return name.strip(" -|–—")
