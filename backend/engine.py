"""
Engine Orchestration Module

Command handlers for the rating history pipeline: load files, load
samples, fetch a player, export, remove a player, set the date window.

DESIGN PRINCIPLES:
==================
1. Layers communicate ONLY through contracts
2. A series is fully built before the store is mutated
3. Failed commands leave the store untouched
4. Rendering and status go to injected sinks, never the reverse
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional
import os

from backend.contracts.base import StatusLevel, StatusMessage
from frontend.interaction.temporal import DateWindow
from frontend.mapper import ChartMapper
from frontend.state.store import SeriesStore
from frontend.visualization.chart import ChartSink, ChartView
from ingestion.contracts import FetchError, FetchReport, SourceFile
from ingestion.fetcher import (
    DEFAULT_API_ROOT, DEFAULT_TIMEOUT_SECONDS, FetcherConfig, RemoteHistoryFetcher
)
from ingestion.registry import SampleRegistry
from ingestion.service import IngestedSeries, IngestionService

StatusSink = Callable[[StatusMessage], None]

ENV_API_ROOT = "RATING_HISTORY_API_ROOT"
ENV_TIMEOUT = "RATING_HISTORY_TIMEOUT"
ENV_SAMPLES = "RATING_HISTORY_SAMPLES"


@dataclass
class EngineConfig:
    """Unified configuration for the engine."""
    fetcher: Optional[FetcherConfig] = None
    samples_config: Optional[Path] = None

    def __post_init__(self):
        self.fetcher = self.fetcher or FetcherConfig()

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> 'EngineConfig':
        """Build a config from RATING_HISTORY_* environment variables."""
        env = os.environ if environ is None else environ

        timeout = DEFAULT_TIMEOUT_SECONDS
        raw_timeout = env.get(ENV_TIMEOUT)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"{ENV_TIMEOUT} must be a number, got {raw_timeout!r}") from None

        samples = env.get(ENV_SAMPLES)
        return cls(
            fetcher=FetcherConfig(
                api_root=env.get(ENV_API_ROOT, DEFAULT_API_ROOT),
                timeout_seconds=timeout
            ),
            samples_config=Path(samples) if samples else None
        )


def _discard(_message) -> None:
    pass


class RatingHistoryEngine:
    """
    Session state plus the command handlers that mutate it.

    OWNED STATE:
    ============
    - SeriesStore (all loaded series)
    - Active DateWindow (None shows everything)

    INJECTED:
    =========
    - chart sink: receives a ChartView after every mutation
    - status sink: receives StatusMessage lines
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        chart_sink: Optional[ChartSink] = None,
        status_sink: Optional[StatusSink] = None,
        ingestion: Optional[IngestionService] = None,
        store: Optional[SeriesStore] = None
    ):
        self._config = config or EngineConfig()
        self._chart_sink = chart_sink or _discard
        self._status_sink = status_sink or _discard
        self._store = store if store is not None else SeriesStore()
        self._mapper = ChartMapper()
        self._window: Optional[DateWindow] = None
        self._last_status: Optional[StatusMessage] = None

        if ingestion is None:
            fetcher = RemoteHistoryFetcher(self._config.fetcher, on_status=self.notify)
            registry = SampleRegistry.load(self._config.samples_config)
            ingestion = IngestionService(fetcher=fetcher, registry=registry)
        self._ingestion = ingestion

    # =========================================================================
    # FILE INTERFACE
    # =========================================================================

    async def load_files(self, files: Iterable[SourceFile]) -> List[str]:
        """Parse selected files and add them. Returns names actually added."""
        return self._register(self._ingestion.parse_files(files))

    async def load_paths(self, paths: Iterable[Path]) -> List[str]:
        """Read files from disk and add them."""
        return self._register(await self._ingestion.load_paths(paths))

    async def load_samples(self) -> List[str]:
        """Add every bundled sample file."""
        return self._register(await self._ingestion.load_samples())

    # =========================================================================
    # REMOTE INTERFACE
    # =========================================================================

    async def fetch_player(self, username: str, add_to_store: bool = True) -> Optional[FetchReport]:
        """
        Fetch a player's histories, one series per time control.

        Blank usernames report an error and return None. FetchError is
        reported and re-raised; the store is untouched in both cases.
        """
        username = username.strip()
        if not username:
            self.notify(StatusMessage("Please enter a username", StatusLevel.ERROR))
            return None

        try:
            report = await self._ingestion.fetch_player(username)
        except FetchError as e:
            self.notify(StatusMessage(f"Error: {e.message}", StatusLevel.ERROR))
            raise

        if add_to_store:
            self._register(self._ingestion.series_from_report(report))
        return report

    def export_player(self, report: FetchReport, directory: Path) -> List[Path]:
        """Write one CSV per time control and extend the status line."""
        written = self._ingestion.export(report, directory)
        suffix = f" Downloaded {len(written)} CSV files!"
        base = self._last_status or StatusMessage("", StatusLevel.SUCCESS)
        self.notify(base.extended(suffix))
        return written

    # =========================================================================
    # STATE INTERFACE
    # =========================================================================

    def remove_player(self, name: str) -> bool:
        removed = self._store.remove(name)
        if removed:
            self.redraw()
        return removed

    def set_window(self, window: Optional[DateWindow]) -> ChartView:
        self._window = window
        return self.redraw()

    def redraw(self) -> ChartView:
        """Project the store through the window and hand it to the chart sink."""
        view = self._mapper.map_store(self._store, self._window)
        self._chart_sink(view)
        return view

    def notify(self, message: StatusMessage) -> None:
        """Record a status line and pass it to the status sink."""
        self._last_status = message
        self._status_sink(message)

    @property
    def store(self) -> SeriesStore:
        return self._store

    @property
    def window(self) -> Optional[DateWindow]:
        return self._window

    @property
    def ingestion(self) -> IngestionService:
        return self._ingestion

    @property
    def last_status(self) -> Optional[StatusMessage]:
        return self._last_status

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _register(self, batch: List[IngestedSeries]) -> List[str]:
        added = []
        for item in batch:
            if self._store.add(item.name, item.points) is None:
                continue
            added.append(item.name)
            self.redraw()
        return added
