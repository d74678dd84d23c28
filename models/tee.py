from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Tee(BaseGolfModel):
    """A tee box discovered on a scorecard page."""
    key: str
    display_name: str
    color: Optional[str] = None  # "white", "blue", "black", "red", "gold"
    rating: Optional[float] = Field(None, ge=55.0, le=85.0)
    slope: Optional[int] = Field(None, ge=55, le=155)
    total_yardage: int = Field(0, ge=0)

    def matches(self, key: str) -> bool:
        """Tee identity is the key, compared case-insensitively."""
        return self.key.lower() == key.lower()
