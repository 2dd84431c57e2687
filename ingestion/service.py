"""
Ingestion Service

Turns files, bundled samples and remote archives into named series
ready for the store. Never touches the store itself.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional
import asyncio
import logging

from backend.contracts.base import SeriesPoints, TimeControlBucket
from .contracts import FetchReport, SourceFile
from .export import write_exports
from .fetcher import RemoteHistoryFetcher
from .parser import parse_series, player_name_from_source
from .registry import SampleRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestedSeries:
    """A fully parsed series awaiting registration."""
    name: str
    points: SeriesPoints


class IngestionService:
    """
    Coordinates parsing, sample loading, fetching and export.

    DESIGN:
    =======
    1. Every returned series is complete before the caller sees it
    2. Sources yielding no valid samples are dropped
    3. Unreadable files are logged and skipped
    """

    def __init__(
        self,
        fetcher: Optional[RemoteHistoryFetcher] = None,
        registry: Optional[SampleRegistry] = None
    ):
        self._fetcher = fetcher or RemoteHistoryFetcher()
        self._registry = registry or SampleRegistry(_sources=[])

    def parse_files(self, files: Iterable[SourceFile]) -> List[IngestedSeries]:
        """Parse selected files in order."""
        parsed = []
        for source in files:
            points = parse_series(source.content)
            name = player_name_from_source(source.name)
            if not points:
                logger.info("No valid samples in %s", source.name)
                continue
            parsed.append(IngestedSeries(name=name, points=points))
        return parsed

    async def read_paths(self, paths: Iterable[Path]) -> List[SourceFile]:
        """Read files off the event loop; unreadable files are skipped."""
        files = []
        for path in paths:
            path = Path(path)
            try:
                content = await asyncio.to_thread(path.read_text, encoding='utf-8')
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not load %s: %s", path, e)
                continue
            files.append(SourceFile(name=path.name, content=content))
        return files

    async def load_paths(self, paths: Iterable[Path]) -> List[IngestedSeries]:
        return self.parse_files(await self.read_paths(paths))

    async def load_samples(self) -> List[IngestedSeries]:
        """Load every bundled sample listed in the registry."""
        return await self.load_paths(self._registry.paths())

    async def fetch_player(self, username: str) -> FetchReport:
        """Fetch a player's histories; raises FetchError."""
        return await self._fetcher.fetch_report(username)

    def series_from_report(self, report: FetchReport) -> List[IngestedSeries]:
        """One series per non-empty time control."""
        return [
            IngestedSeries(name=series_name(report.username, bucket), points=points)
            for bucket, points in report.histories.items()
        ]

    def export(self, report: FetchReport, directory: Path) -> List[Path]:
        """Write `<username>_<bucket>.csv` files."""
        return write_exports(report.histories, report.username, directory)

    @property
    def registry(self) -> SampleRegistry:
        return self._registry

    @property
    def fetcher(self) -> RemoteHistoryFetcher:
        return self._fetcher


def series_name(username: str, bucket: TimeControlBucket) -> str:
    """Store name for a fetched bucket; matches the name of its export file."""
    return f"{username} {bucket.value}"
