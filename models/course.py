from datetime import datetime, timezone
from enum import Enum
from pydantic import Field, model_validator
from typing import Dict, List, Optional

from .base import BaseGolfModel
from .hole import Hole
from .tee import Tee


class ExtractionMethod(str, Enum):
    """Which strategy produced a course document."""
    GENERIC_TABLE = "generic_table"
    EMBEDDED_JSON = "embedded_json"
    DOM_FALLBACK = "dom_fallback"


class CourseDocument(BaseGolfModel):
    """Course scraped from a scorecard page, with its holes and tee options."""
    name: str
    location: str
    holes: List[Hole] = Field(default_factory=list)
    tees: List[Tee] = Field(default_factory=list)
    total_par: int = Field(0, ge=0)
    total_yardage: Dict[str, int] = Field(default_factory=dict)
    hole_count: int = Field(0, ge=0)
    source_url: str = ""
    extraction_method: ExtractionMethod
    extracted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode='after')
    def validate_hole_order(self):
        """Holes must be strictly ascending by number (sorted, no duplicates)."""
        numbers = [h.number for h in self.holes]
        for prev, cur in zip(numbers, numbers[1:]):
            if cur <= prev:
                raise ValueError(f"Holes must be sorted with unique numbers, got {prev} before {cur}")
        return self

    def get_hole(self, number: int) -> Optional[Hole]:
        """Get a hole by its number (1-18)."""
        for hole in self.holes:
            if hole.number == number:
                return hole
        return None

    def get_tee(self, key: str) -> Optional[Tee]:
        """Get a tee by its key (case-insensitive)."""
        for tee in self.tees:
            if tee.matches(key):
                return tee
        return None

    @property
    def tee_keys(self) -> List[str]:
        return [t.key for t in self.tees]
