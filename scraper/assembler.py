from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from models import CourseDocument, ExtractionMethod, Hole, Tee
from scraper.raw import RawHole, RawTee


def _build_tees(raw_holes: List[RawHole], raw_tees: Iterable[RawTee]) -> List[Tee]:
    """Tee set = supplied tee metadata plus any key seen in hole yardages.

    Keys are matched case-insensitively; the first spelling seen is kept.
    """
    ordered: List[RawTee] = []
    by_lower: Dict[str, RawTee] = {}
    for raw_tee in raw_tees:
        if raw_tee.key.lower() not in by_lower:
            by_lower[raw_tee.key.lower()] = raw_tee
            ordered.append(raw_tee)

    for raw_hole in raw_holes:
        for key in raw_hole.yardages:
            if key.lower() not in by_lower:
                discovered = RawTee(key=key, display_name=key.capitalize(), color=key)
                by_lower[key.lower()] = discovered
                ordered.append(discovered)

    tees = []
    for raw_tee in ordered:
        yardages = [
            yardage
            for raw_hole in raw_holes
            for key, yardage in raw_hole.yardages.items()
            if key.lower() == raw_tee.key.lower()
        ]
        # A published total is only used when no hole carries a yardage for this tee.
        total = sum(yardages) if yardages else (raw_tee.reported_total or 0)
        tees.append(Tee(
            key=raw_tee.key,
            display_name=raw_tee.display_name,
            color=raw_tee.color,
            rating=raw_tee.rating,
            slope=raw_tee.slope,
            total_yardage=total,
        ))
    return tees


def assemble(
    raw_holes: Iterable[RawHole],
    raw_tees: Iterable[RawTee],
    name: str,
    location: str,
    source_url: str,
    method: ExtractionMethod,
    extracted_at: Optional[datetime] = None,
) -> CourseDocument:
    """Merge per-tee hole data into one course document.

    Inputs are assumed already range-checked by the extractor that produced
    them. Unknown pars count as 0 toward total_par.
    """
    raw_holes = list(raw_holes)
    tees = _build_tees(raw_holes, raw_tees)

    holes = sorted(
        (
            Hole(
                number=h.number,
                par=h.par,
                stroke_index=h.stroke_index,
                yardages=dict(h.yardages),
            )
            for h in raw_holes
        ),
        key=lambda h: h.number,
    )

    return CourseDocument(
        name=name,
        location=location,
        holes=holes,
        tees=tees,
        total_par=sum(h.par or 0 for h in holes),
        total_yardage={t.key: t.total_yardage for t in tees},
        hole_count=len(holes),
        source_url=source_url,
        extraction_method=method,
        extracted_at=extracted_at or datetime.now(timezone.utc),
    )
