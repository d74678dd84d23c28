"""BlueGolf DOM fallback, used when a provider page carries no usable JSON.

Provider tables have no reliable headers, so each row is read by anchor
(first cell = hole number) and value ranges.
"""

import logging
from typing import Dict, List, Optional

from bs4 import Tag

from models import CourseDocument, ExtractionMethod
from scraper.assembler import assemble
from scraper.exceptions import NoScorecardFound
from scraper.fetcher import RenderedPage
from scraper.parsing import (
    FALLBACK_YARDAGE_RANGE,
    HOLE_RANGE,
    PAR_RANGE,
    PROVIDER_DEFAULT_NAME,
    STROKE_INDEX_RANGE,
    UNKNOWN_LOCATION,
    accept,
    cell_text,
    in_range,
    load_html,
    page_title,
    parse_int,
    row_cells,
    strip_provider_branding,
)
from scraper.raw import RawHole, RawTee

logger = logging.getLogger(__name__)

FALLBACK_TEE_ORDER = ["white", "yellow", "red"]
MIN_HOLES_FOR_SCORECARD = 9


def _assign_positional_yardages(hole: RawHole, yardages: List[int]) -> None:
    """Give the n-th yardage in a row to the n-th tee of FALLBACK_TEE_ORDER.

    Without headers there is no way to know which tee a column belongs to;
    a page that lists tees in another order gets them swapped. Extra
    values beyond the known tees are dropped.
    """
    for color, yardage in zip(FALLBACK_TEE_ORDER, yardages):
        hole.yardages.setdefault(color, yardage)


def _classify_row(hole: RawHole, values: List[int]) -> None:
    yardages: List[int] = []
    for value in values:
        if hole.par is None and in_range(value, PAR_RANGE):
            hole.par = value
        elif hole.stroke_index is None and in_range(value, STROKE_INDEX_RANGE):
            hole.stroke_index = value
        elif in_range(value, FALLBACK_YARDAGE_RANGE):
            yardages.append(value)
    _assign_positional_yardages(hole, yardages)


def _holes_from_table(table: Tag) -> Dict[int, RawHole]:
    holes: Dict[int, RawHole] = {}
    for row in table.find_all("tr"):
        cells = row_cells(row)
        if not cells:
            continue
        number = accept(parse_int(cell_text(cells[0])), HOLE_RANGE)
        if number is None:
            continue

        values = [parse_int(cell_text(c)) for c in cells[1:]]
        hole = holes.setdefault(number, RawHole(number=number))
        _classify_row(hole, [v for v in values if v is not None])
    return holes


def _course_name(title: str) -> str:
    return strip_provider_branding(title) or PROVIDER_DEFAULT_NAME


def extract_from_dom_fallback(page: RenderedPage) -> CourseDocument:
    """Extract a course from the first table holding at least nine holes.

    Raises:
        NoScorecardFound: If no table yields nine or more valid holes.
    """
    soup = load_html(page.html)

    chosen: Optional[Dict[int, RawHole]] = None
    for table_index, table in enumerate(soup.find_all("table")):
        holes = _holes_from_table(table)
        if len(holes) >= MIN_HOLES_FOR_SCORECARD:
            logger.debug("DOM fallback: table %d has %d holes", table_index + 1, len(holes))
            chosen = holes
            break
        if holes:
            logger.debug(
                "DOM fallback: table %d has only %d holes, skipping", table_index + 1, len(holes)
            )

    if chosen is None:
        raise NoScorecardFound(
            f"No table with at least {MIN_HOLES_FOR_SCORECARD} holes was found"
        )

    observed = [c for c in FALLBACK_TEE_ORDER if any(c in h.yardages for h in chosen.values())]
    tees = [RawTee(key=color, display_name=color.capitalize(), color=color) for color in observed]

    return assemble(
        chosen.values(),
        tees,
        name=_course_name(page.page_title or page_title(soup)),
        location=UNKNOWN_LOCATION,
        source_url=page.url,
        method=ExtractionMethod.DOM_FALLBACK,
    )
