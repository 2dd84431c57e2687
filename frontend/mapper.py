"""
Store to Chart Mapper

Converts stored series to read-only chart views.

MAPPING BOUNDARY:
=================
This is the ONLY place where stored series become chart datasets.
All projection happens here, nowhere else.

MAPPING RULES:
==============
1. Preserve store ordering
2. Apply the date window to every series identically
3. Never mutate the store
"""

from __future__ import annotations
from typing import Optional

from backend.contracts.base import Series
from frontend.interaction.temporal import DateWindow
from frontend.state.store import SeriesStore
from frontend.visualization.chart import (
    FILL_ALPHA_SUFFIX, ChartDataset, ChartPoint, ChartView, project
)


class ChartMapper:
    """
    Maps stored series to chart datasets.

    SINGLE POINT OF CONVERSION:
    ===========================
    All store -> chart conversion goes through this class.
    """

    def map_series(self, series: Series, window: Optional[DateWindow]) -> ChartDataset:
        visible = project(series.points, window)
        return ChartDataset(
            label=series.name,
            border_color=series.color,
            background_color=series.color + FILL_ALPHA_SUFFIX,
            points=tuple(ChartPoint(x=p.date, y=p.rating) for p in visible)
        )

    def map_store(self, store: SeriesStore, window: Optional[DateWindow]) -> ChartView:
        return ChartView(
            datasets=tuple(self.map_series(s, window) for s in store.list()),
            window=window
        )
