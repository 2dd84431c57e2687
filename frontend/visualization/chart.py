"""
Chart Visualization Contracts

Responsibility:
Deterministic projection of stored series into renderable chart views.
Input: Series + DateWindow -> Output: ChartView

The chart widget itself is an external collaborator; it receives a
ChartView through a ChartSink and never mutates series data.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence, Tuple

from backend.contracts.base import RatingSample, SeriesPoints
from frontend.interaction.temporal import DateWindow

# Two hex digits appended to the line color for the fill
FILL_ALPHA_SUFFIX = "20"


def project(points: Sequence[RatingSample], window: Optional[DateWindow]) -> SeriesPoints:
    """
    Visible part of a series for an inclusive window.

    No window returns every point; start > end returns nothing.
    """
    if window is None:
        return tuple(points)
    return tuple(p for p in points if window.contains(p.date))


@dataclass(frozen=True)
class ChartPoint:
    """A single `{x, y}` point."""
    x: date
    y: int


@dataclass(frozen=True)
class ChartDataset:
    """One line on the chart, ready for rendering."""
    label: str
    border_color: str
    background_color: str
    points: Tuple[ChartPoint, ...]

    @property
    def point_count(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class ChartView:
    """
    Fully projected chart.

    DETERMINISTIC:
    Same store contents + same window = identical view.
    """
    datasets: Tuple[ChartDataset, ...]
    window: Optional[DateWindow]

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(d.label for d in self.datasets)


ChartSink = Callable[[ChartView], None]
