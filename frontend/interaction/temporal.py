"""
Temporal Interaction Contracts

Responsibility:
Model the user's date-range selection.
No projection logic - just the window itself.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Optional

from backend.contracts.base import parse_date


@dataclass(frozen=True)
class DateWindow:
    """
    Inclusive date range restricting what is displayed.

    start > end is allowed and selects nothing.
    """
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @classmethod
    def parse(cls, start: Optional[str], end: Optional[str]) -> Optional['DateWindow']:
        """
        Build a window from UI input strings.

        Returns None when either bound is blank or unparseable, which
        means "show everything".
        """
        start_day = parse_date(start or '')
        end_day = parse_date(end or '')
        if start_day is None or end_day is None:
            return None
        return cls(start=start_day, end=end_day)
