"""Generic scorecard extraction from HTML tables.

Works on any page: finds a header row by keyword, maps columns to roles
(hole, par, stroke index, one yardage column per tee color) and reads the
remaining rows as holes.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bs4 import Tag

from models import CourseDocument, ExtractionMethod
from scraper.assembler import assemble
from scraper.exceptions import NoScorecardFound
from scraper.parsing import (
    HOLE_RANGE,
    PAR_RANGE,
    STROKE_INDEX_RANGE,
    UNKNOWN_COURSE,
    UNKNOWN_LOCATION,
    YARDAGE_RANGE,
    accept,
    cell_text,
    first_heading,
    load_html,
    page_title,
    parse_int,
    row_cells,
    strip_scorecard_suffix,
)
from scraper.raw import RawHole, RawTee

logger = logging.getLogger(__name__)

TEE_COLORS = ["white", "yellow", "red", "blue", "black", "gold", "green", "orange", "purple"]
STROKE_INDEX_KEYWORDS = ("hdcp", "handicap", "index")
MIN_TABLE_ROWS = 3
MIN_ROW_CELLS = 3


@dataclass
class ColumnMap:
    """Role -> column index for one table. Later matches overwrite earlier ones."""
    header_row: Optional[Tag] = None
    hole: Optional[int] = None
    par: Optional[int] = None
    stroke_index: Optional[int] = None
    tees: Dict[str, int] = field(default_factory=dict)

    @property
    def is_scorecard(self) -> bool:
        return self.header_row is not None and self.hole is not None


def _classify_columns(rows: List[Tag]) -> ColumnMap:
    columns = ColumnMap()
    for row in rows:
        for index, cell in enumerate(row_cells(row)):
            text = cell_text(cell).lower()
            if "hole" in text:
                columns.hole = index
                columns.header_row = row
            for color in TEE_COLORS:
                if color in text:
                    columns.tees[color] = index
            if "par" in text:
                columns.par = index
            if any(keyword in text for keyword in STROKE_INDEX_KEYWORDS):
                columns.stroke_index = index
    return columns


def _read_cell(cells: List[Tag], index: Optional[int], bounds) -> Optional[int]:
    if index is None or index >= len(cells):
        return None
    return accept(parse_int(cell_text(cells[index])), bounds)


def _parse_row(cells: List[Tag], columns: ColumnMap) -> Optional[RawHole]:
    """Parse one data row. Returns None when the hole number is not 1-18."""
    number = _read_cell(cells, columns.hole, HOLE_RANGE)
    if number is None:
        return None

    hole = RawHole(
        number=number,
        par=_read_cell(cells, columns.par, PAR_RANGE),
        stroke_index=_read_cell(cells, columns.stroke_index, STROKE_INDEX_RANGE),
    )
    for color, index in columns.tees.items():
        yardage = _read_cell(cells, index, YARDAGE_RANGE)
        if yardage is not None:
            hole.yardages[color] = yardage
    return hole


def _course_name(soup) -> str:
    name = strip_scorecard_suffix(page_title(soup))
    if not name:
        name = first_heading(soup)
    return name or UNKNOWN_COURSE


def extract_from_tables(html: str, source_url: str = "") -> CourseDocument:
    """Extract a course from the scorecard tables of a rendered page.

    Every table with a recognisable header contributes rows, so front-nine
    and back-nine tables merge into one course. A repeated hole number
    overwrites the earlier row.

    Raises:
        NoScorecardFound: If no table has a hole column, or no row holds a
            valid hole number.
    """
    soup = load_html(html)
    holes: Dict[int, RawHole] = {}
    found_header = False

    for table_index, table in enumerate(soup.find_all("table")):
        rows = table.find_all("tr")
        if len(rows) < MIN_TABLE_ROWS:
            continue

        columns = _classify_columns(rows)
        if not columns.is_scorecard:
            logger.debug("Table %d: no hole column, skipping", table_index + 1)
            continue

        found_header = True
        logger.debug(
            "Table %d: hole=%s par=%s hdcp=%s tees=%s",
            table_index + 1, columns.hole, columns.par, columns.stroke_index,
            sorted(columns.tees),
        )

        for row in rows:
            if row is columns.header_row:
                continue
            cells = row_cells(row)
            if len(cells) < MIN_ROW_CELLS:
                continue
            hole = _parse_row(cells, columns)
            if hole is None:
                continue
            if hole.number in holes:
                logger.warning("Hole %d appears more than once; keeping the later row", hole.number)
            holes[hole.number] = hole

    if not found_header:
        raise NoScorecardFound("No table with a scorecard header (hole column) was found")
    if not holes:
        raise NoScorecardFound("Scorecard table found but no row had a valid hole number (1-18)")

    observed = [c for c in TEE_COLORS if any(c in h.yardages for h in holes.values())]
    tees = [RawTee(key=color, display_name=color.capitalize(), color=color) for color in observed]

    return assemble(
        holes.values(),
        tees,
        name=_course_name(soup),
        location=UNKNOWN_LOCATION,
        source_url=source_url,
        method=ExtractionMethod.GENERIC_TABLE,
    )
