"""
Base Contracts and Shared Types

Foundational types shared by ingestion, state and visualization.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Layers may import types but MUST NOT modify this module
- All types are frozen dataclasses for immutability guarantee
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple
import re


# =============================================================================
# TIME SERIES TYPES
# =============================================================================

@dataclass(frozen=True, order=True)
class RatingSample:
    """
    One rating observation at day resolution.

    Ordering compares date first, then rating.
    """
    date: date
    rating: int

    def __post_init__(self):
        if not isinstance(self.date, date):
            raise ValueError("RatingSample date must be a calendar date")
        if isinstance(self.rating, bool) or not isinstance(self.rating, int):
            raise ValueError("RatingSample rating must be an integer")
        if self.rating < 0:
            raise ValueError("RatingSample rating must be non-negative")


# Canonical series body: ascending by date
SeriesPoints = Tuple[RatingSample, ...]


@dataclass(frozen=True)
class Series:
    """
    A named, colored, time-ordered rating history.

    Replaced wholesale, never edited in place.
    """
    name: str
    color: str
    points: SeriesPoints


class TimeControlBucket(Enum):
    """Pace-of-play categories, in result order."""
    BULLET = "bullet"
    BLITZ = "blitz"
    RAPID = "rapid"
    DAILY = "daily"

    @classmethod
    def from_time_class(cls, value: object) -> TimeControlBucket | None:
        """Map an API time_class to a bucket; unknown classes give None."""
        try:
            return cls(value)
        except ValueError:
            return None


# =============================================================================
# STATUS (UI-facing side channel)
# =============================================================================

class StatusLevel(Enum):
    """Severity of a status line."""
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """One human-readable status line for the status sink."""
    text: str
    level: StatusLevel = StatusLevel.INFO

    def extended(self, suffix: str) -> StatusMessage:
        """Return a copy with text appended (immutable)."""
        return StatusMessage(text=self.text + suffix, level=self.level)


# =============================================================================
# CALENDAR DATES
# =============================================================================

# YYYY-MM-DD, optionally followed by a time of day and UTC offset
_ISO_DAY = re.compile(
    r'^(\d{4}-\d{2}-\d{2})'
    r'(?:[T ]\d{2}(?::\d{2}(?::\d{2}(?:\.\d{1,6})?)?)?(?:Z|[+-]\d{2}:\d{2})?)?$'
)


def parse_date(value: str) -> Optional[date]:
    """
    Parse an ISO calendar date, or an ISO datetime truncated to its date.

    Only the extended `YYYY-MM-DD` form is accepted, whatever the
    interpreter's own isoformat parser allows.
    """
    match = _ISO_DAY.match(value.strip())
    if match is None:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None
