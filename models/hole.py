from pydantic import Field, field_validator
from typing import Dict, Optional

from .base import BaseGolfModel


class Hole(BaseGolfModel):
    """A single hole as read off a scorecard.

    Only the number is mandatory. Unknown par, stroke index or yardage stays
    None / missing rather than zero.
    """
    number: int = Field(..., ge=1, le=18)
    par: Optional[int] = Field(None, ge=3, le=5)
    stroke_index: Optional[int] = Field(None, ge=1, le=18)
    yardages: Dict[str, int] = Field(default_factory=dict)  # {"white": 382, ...}

    @field_validator('yardages')
    @classmethod
    def validate_yardages(cls, v):
        for tee_key, yardage in v.items():
            if not 50 <= yardage <= 700:
                raise ValueError(f"Yardage {yardage} for tee '{tee_key}' outside range (50-700)")
        return v

    def get_yardage(self, tee_key: str) -> Optional[int]:
        """Get yardage for a tee, matching the key case-insensitively."""
        for key, yardage in self.yardages.items():
            if key.lower() == tee_key.lower():
                return yardage
        return None
