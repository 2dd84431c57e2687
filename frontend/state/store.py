"""
Series Store

Holds the named, colored series currently loaded.

GUARANTEES:
===========
1. At most one series per name; the first writer wins
2. Colors come from a fixed palette indexed by a counter that
   never decreases, so a re-added name gets a new color
3. list() preserves insertion order
"""

from __future__ import annotations
from typing import Dict, Final, Iterator, List, Optional, Sequence, Tuple

from backend.contracts.base import RatingSample, Series

PALETTE: Final[Tuple[str, ...]] = (
    '#e94560', '#00d9ff', '#00ff88', '#ffaa00',
    '#ff66cc', '#66ffcc', '#ff6666', '#9966ff',
)


class SeriesStore:
    """Owns every loaded series. Only replaced or removed, never edited."""

    def __init__(self, palette: Sequence[str] = PALETTE):
        if not palette:
            raise ValueError("palette must not be empty")
        self._palette = tuple(palette)
        self._series: Dict[str, Series] = {}
        self._color_counter = 0

    def add(self, name: str, points: Sequence[RatingSample]) -> Optional[Series]:
        """
        Register a series under `name`.

        Returns the new Series, or None if the name is already taken
        (the existing series is left untouched).
        """
        if name in self._series:
            return None

        color = self._palette[self._color_counter % len(self._palette)]
        self._color_counter += 1

        series = Series(name=name, color=color, points=tuple(points))
        self._series[name] = series
        return series

    def remove(self, name: str) -> bool:
        """Drop `name`. Returns False if it was not present."""
        return self._series.pop(name, None) is not None

    def list(self) -> List[Series]:
        """Series in insertion order."""
        return list(self._series.values())

    def get(self, name: str) -> Optional[Series]:
        return self._series.get(name)

    def names(self) -> List[str]:
        return list(self._series)

    @property
    def color_counter(self) -> int:
        return self._color_counter

    def __contains__(self, name: object) -> bool:
        return name in self._series

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[Series]:
        return iter(self.list())
