"""BlueGolf scorecard extraction from JSON embedded in inline scripts.

Provider pages ship the scorecard as a JSON blob inside a <script>, either
as a literal inside some larger code or assigned to a global. We locate
candidate objects with a prioritised list of matchers and keep the first
one that actually yields tees and holes.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from models import CourseDocument, ExtractionMethod
from scraper.assembler import assemble
from scraper.exceptions import NoEmbeddedData
from scraper.parsing import (
    HOLE_RANGE,
    PAR_RANGE,
    PROVIDER_DEFAULT_NAME,
    RATING_RANGE,
    SLOPE_RANGE,
    STROKE_INDEX_RANGE,
    UNKNOWN_LOCATION,
    YARDAGE_RANGE,
    accept,
    in_range,
    parse_float,
    parse_int,
    strip_provider_branding,
)
from scraper.raw import RawHole, RawTee

logger = logging.getLogger(__name__)

SCRIPT_TOKENS = ("tees", "holes", "course", "scorecard")
MAX_BRACE_LOOKBACK = 64

TEE_NAME_KEYS = ("name", "teeName")
TEE_COLOR_KEYS = ("color", "teeColor")
TEE_RATING_KEYS = ("rating", "courseRating")
TEE_SLOPE_KEYS = ("slope", "slopeRating")
TEE_TOTAL_KEYS = ("totalDistance", "totalLength", "totalYardage", "yardage")
HOLE_NUMBER_KEYS = ("holeNumber", "number", "hole")
HOLE_PAR_KEYS = ("par",)
HOLE_INDEX_KEYS = ("handicap", "hcp", "strokeIndex", "index")
HOLE_DISTANCE_KEYS = ("length", "distance", "yardage", "yards")

def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


# Strict JSON: NaN, Infinity and -Infinity fail the candidate.
_decoder = json.JSONDecoder(parse_constant=_reject_constant)
_GLOBAL_ASSIGNMENT = re.compile(r'[A-Za-z_$][\w$.]*\s*=\s*(?=\{)')


# ================================================================
# Candidate matchers
# ================================================================

def _decode_object_at(text: str, start: int) -> Optional[Tuple[Dict[str, Any], int]]:
    try:
        obj, end = _decoder.raw_decode(text, start)
    except ValueError:
        return None
    if not isinstance(obj, dict):
        return None
    return obj, end


def _objects_enclosing_key(text: str, key: str) -> Iterator[Dict[str, Any]]:
    """Smallest JSON object around each occurrence of "key":.

    Walks back from the key to earlier '{' characters until one decodes
    as an object that spans past the key. At most MAX_BRACE_LOOKBACK braces
    are tried per key, so a key preceded by more sibling objects than that
    (a long "holes" array ahead of "tees", say) is left to the greedy and
    global-assignment matchers.
    """
    seen: Set[int] = set()
    for match in re.finditer(r'"%s"\s*:' % re.escape(key), text):
        key_pos = match.start()
        brace = text.rfind("{", 0, key_pos)
        attempts = 0
        while brace != -1 and attempts < MAX_BRACE_LOOKBACK:
            attempts += 1
            decoded = _decode_object_at(text, brace)
            if decoded is not None and decoded[1] > key_pos:
                if brace not in seen:
                    seen.add(brace)
                    yield decoded[0]
                break
            brace = text.rfind("{", 0, brace)


def _minimal_tees_objects(text: str) -> Iterator[Dict[str, Any]]:
    return _objects_enclosing_key(text, "tees")


def _minimal_holes_objects(text: str) -> Iterator[Dict[str, Any]]:
    return _objects_enclosing_key(text, "holes")


def _greedy_tees_object(text: str) -> Iterator[Dict[str, Any]]:
    """Everything from the first '{' to the last '}' around the last "tees"."""
    tees = text.rfind('"tees"')
    if tees == -1:
        return
    start = text.find("{", 0, tees)
    end = text.rfind("}", tees)
    if start == -1 or end == -1:
        return
    try:
        obj = _decoder.decode(text[start:end + 1])
    except ValueError:
        return
    if isinstance(obj, dict):
        yield obj


def _global_assignments(text: str) -> Iterator[Dict[str, Any]]:
    """Objects assigned to a global, e.g. `window.scorecardData = {...};`."""
    for match in _GLOBAL_ASSIGNMENT.finditer(text):
        decoded = _decode_object_at(text, match.end())
        if decoded is not None:
            yield decoded[0]


MATCHERS: List[Callable[[str], Iterable[Dict[str, Any]]]] = [
    _minimal_tees_objects,
    _minimal_holes_objects,
    _greedy_tees_object,
    _global_assignments,
]


# ================================================================
# Field access
# ================================================================

def _first_present(data: Dict[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _first_text(data: Dict[str, Any], keys: Sequence[str]) -> Optional[str]:
    value = _first_present(data, keys)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _course_data(obj: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Pick the object holding the scorecard: `course` if it has tees, else obj."""
    course = obj.get("course")
    if isinstance(course, dict) and "tees" in course:
        return course
    if "tees" in obj or "holes" in obj:
        return obj
    return None


# ================================================================
# Tee / hole building
# ================================================================

def _read_hole(entry: Any) -> Optional[RawHole]:
    if not isinstance(entry, dict):
        return None
    number = accept(parse_int(_first_present(entry, HOLE_NUMBER_KEYS)), HOLE_RANGE)
    if number is None:
        return None
    return RawHole(
        number=number,
        par=accept(parse_int(_first_present(entry, HOLE_PAR_KEYS)), PAR_RANGE),
        stroke_index=accept(parse_int(_first_present(entry, HOLE_INDEX_KEYS)), STROKE_INDEX_RANGE),
    )


def _canonical_holes(entries: Any) -> List[Optional[RawHole]]:
    """Hole list from the first tee, one slot per array index.

    Invalid entries keep an empty slot so later tees still line up by index.
    A repeated hole number empties the earlier slot (last one wins).
    """
    if not isinstance(entries, list):
        return []
    slots: List[Optional[RawHole]] = []
    index_by_number: Dict[int, int] = {}
    for entry in entries:
        hole = _read_hole(entry)
        if hole is not None:
            if hole.number in index_by_number:
                logger.warning("Embedded hole %d listed twice; keeping the later entry", hole.number)
                slots[index_by_number[hole.number]] = None
            index_by_number[hole.number] = len(slots)
        slots.append(hole)
    return slots


def _align_tee_yardages(slots: List[Optional[RawHole]], entries: Any, tee_key: str) -> None:
    """Record one tee's distances into the canonical holes.

    Alignment is by array index, not hole number: entry i of every tee is
    assumed to describe the same hole as entry i of the first tee. A tee
    with a different hole count or order misassigns yardages silently.
    Matching on each entry's own hole number would fix that here.
    """
    if not isinstance(entries, list):
        return
    for index, entry in enumerate(entries):
        if index >= len(slots) or slots[index] is None or not isinstance(entry, dict):
            continue
        yardage = accept(parse_int(_first_present(entry, HOLE_DISTANCE_KEYS)), YARDAGE_RANGE)
        if yardage is not None:
            slots[index].yardages[tee_key] = yardage


def _unique_key(base: str, taken: Set[str]) -> str:
    key = base
    suffix = 2
    while key.lower() in taken:
        key = f"{base} ({suffix})"
        suffix += 1
    taken.add(key.lower())
    return key


def _read_tee(data: Dict[str, Any], position: int, taken: Set[str]) -> RawTee:
    name = _first_text(data, TEE_NAME_KEYS)
    color = _first_text(data, TEE_COLOR_KEYS)
    key = _unique_key(name or color or f"Tee {position + 1}", taken)

    rating = parse_float(_first_present(data, TEE_RATING_KEYS))
    slope = parse_int(_first_present(data, TEE_SLOPE_KEYS))
    total = parse_int(_first_present(data, TEE_TOTAL_KEYS))

    return RawTee(
        key=key,
        display_name=name or color or key,
        color=color,
        rating=rating if in_range(rating, RATING_RANGE) else None,
        slope=slope if in_range(slope, SLOPE_RANGE) else None,
        reported_total=total if total is not None and total > 0 else None,
    )


def _build_from_tees(tees_data: Any) -> Optional[Tuple[List[RawHole], List[RawTee]]]:
    """Turn a `tees` array into holes and tees, or None if no holes come out."""
    if not isinstance(tees_data, list):
        return None
    tee_entries = [t for t in tees_data if isinstance(t, dict)]
    if not tee_entries:
        return None

    slots = _canonical_holes(tee_entries[0].get("holes"))
    if not any(slots):
        return None

    taken: Set[str] = set()
    raw_tees: List[RawTee] = []
    for position, entry in enumerate(tee_entries):
        raw_tee = _read_tee(entry, position, taken)
        raw_tees.append(raw_tee)
        _align_tee_yardages(slots, entry.get("holes"), raw_tee.key)

    return [h for h in slots if h is not None], raw_tees


def _course_name(data: Dict[str, Any], page_title: str) -> str:
    name = _first_text(data, ("name", "courseName"))
    if not name and isinstance(data.get("course"), dict):
        name = _first_text(data["course"], ("name", "courseName"))
    if not name:
        name = strip_provider_branding(page_title)
    return name or PROVIDER_DEFAULT_NAME


def _course_location(data: Dict[str, Any]) -> str:
    location = _first_text(data, ("location",))
    if location:
        return location
    parts = [p for p in (_first_text(data, ("city",)), _first_text(data, ("state", "stateProvince"))) if p]
    return ", ".join(parts) if parts else UNKNOWN_LOCATION


# ================================================================
# Public API
# ================================================================

def _match_script(text: str) -> Optional[Tuple[Dict[str, Any], List[RawHole], List[RawTee]]]:
    """Run matchers in priority order; first candidate that builds wins."""
    for matcher in MATCHERS:
        for candidate in matcher(text):
            data = _course_data(candidate)
            if data is None:
                continue
            built = _build_from_tees(data.get("tees"))
            if built is not None:
                logger.debug("Embedded course data found by %s", matcher.__name__)
                return data, built[0], built[1]
    return None


def extract_from_scripts(
    script_contents: Iterable[str],
    page_title: str = "",
    source_url: str = "",
) -> CourseDocument:
    """Extract a course from scorecard JSON embedded in inline scripts.

    Raises:
        NoEmbeddedData: If no script yields tees with a non-empty hole list.
    """
    for index, text in enumerate(script_contents):
        if not text:
            continue
        lowered = text.lower()
        if not any(token in lowered for token in SCRIPT_TOKENS):
            continue

        matched = _match_script(text)
        if matched is None:
            continue

        data, holes, tees = matched
        logger.info("Embedded scorecard in script %d: %d holes, %d tees", index, len(holes), len(tees))
        return assemble(
            holes,
            tees,
            name=_course_name(data, page_title),
            location=_course_location(data),
            source_url=source_url,
            method=ExtractionMethod.EMBEDDED_JSON,
        )

    raise NoEmbeddedData("No inline script contained scorecard JSON with tees and holes")
