"""Mutable per-extraction records, turned into frozen models by the assembler."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class RawHole:
    number: int
    par: Optional[int] = None
    stroke_index: Optional[int] = None
    yardages: Dict[str, int] = field(default_factory=dict)


@dataclass
class RawTee:
    key: str
    display_name: str
    color: Optional[str] = None
    rating: Optional[float] = None
    slope: Optional[int] = None
    reported_total: Optional[int] = None  # total distance as published, if any
