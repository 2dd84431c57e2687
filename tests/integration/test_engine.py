"""
Engine Command Tests

AXIOM UNDER TEST:
=================
Commands either apply fully or leave the store untouched, and every
mutation is followed by a redraw through the chart sink.
"""

import asyncio
from datetime import date

import pytest

from backend.contracts.base import RatingSample, StatusLevel, TimeControlBucket
from backend.engine import EngineConfig, RatingHistoryEngine
from frontend.interaction.temporal import DateWindow
from frontend.state.store import PALETTE
from ingestion.contracts import FetchError, FetchErrorCode, SourceFile

from tests.integration.fixtures import HIKARU_ROUTES, INDEX, JAN, RecordingEngine, hikaru_game


MAGNUS = SourceFile("player1_magnus.csv", "date,rating\n2024-01-01,2830\n2024-03-01,2835\n")
HIKARU_FILE = SourceFile("player2_hikaru.csv", "date,rating\n2024-02-01,2790\n")


# =============================================================================
# FILE COMMANDS
# =============================================================================

class TestLoadFiles:

    def test_adds_and_redraws_per_series(self):
        harness = RecordingEngine()

        added = asyncio.run(harness.engine.load_files([MAGNUS, HIKARU_FILE]))

        assert added == ["magnus", "hikaru"]
        assert len(harness.views) == 2
        assert harness.views[-1].labels == ("magnus", "hikaru")

    def test_duplicate_file_name_silently_ignored(self):
        harness = RecordingEngine()
        asyncio.run(harness.engine.load_files([MAGNUS]))
        replacement = SourceFile("player9_magnus.csv", "date,rating\n2020-01-01,1000\n")

        added = asyncio.run(harness.engine.load_files([replacement]))

        assert added == []
        assert harness.engine.store.get("magnus").points[0] == RatingSample(date(2024, 1, 1), 2830)
        assert harness.statuses == []

    def test_load_paths_reads_disk(self, tmp_path):
        path = tmp_path / "player4_ding.csv"
        path.write_text("date,rating\n2024-01-01,2780\n", encoding="utf-8")
        harness = RecordingEngine()

        added = asyncio.run(harness.engine.load_paths([path, tmp_path / "missing.csv"]))

        assert added == ["ding"]


# =============================================================================
# FETCH COMMANDS
# =============================================================================

class TestFetchPlayer:

    def test_success_adds_one_series_per_bucket(self):
        harness = RecordingEngine(routes=HIKARU_ROUTES)

        report = asyncio.run(harness.engine.fetch_player("hikaru"))

        store = harness.engine.store
        assert store.names() == ["hikaru blitz", "hikaru rapid"]
        assert store.get("hikaru blitz").points == (
            RatingSample(date(2024, 1, 10), 3260),
            RatingSample(date(2024, 2, 2), 3270),
        )
        assert report.total_points == 3
        assert harness.status_texts[-1].startswith("Success! Found 3 data points")

    def test_blank_username_reports_and_skips(self):
        harness = RecordingEngine(routes=HIKARU_ROUTES)

        assert asyncio.run(harness.engine.fetch_player("   ")) is None
        assert harness.statuses[-1].text == "Please enter a username"
        assert harness.statuses[-1].level == StatusLevel.ERROR

    def test_unknown_player_leaves_store_untouched(self):
        harness = RecordingEngine(routes={})
        asyncio.run(harness.engine.load_files([MAGNUS]))
        views_before = len(harness.views)

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(harness.engine.fetch_player("ghost"))

        assert exc_info.value.code == FetchErrorCode.PLAYER_NOT_FOUND
        assert harness.engine.store.names() == ["magnus"]
        assert len(harness.views) == views_before
        assert harness.statuses[-1].text == "Error: Player not found or API error (404)"

    def test_no_games_leaves_store_untouched(self):
        routes = {
            INDEX: {"archives": [JAN]},
            JAN: {"games": [dict(hikaru_game((2024, 1, 1), 3000, "blitz"), rules="crazyhouse")]},
        }
        harness = RecordingEngine(routes=routes)

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(harness.engine.fetch_player("hikaru"))

        assert exc_info.value.code == FetchErrorCode.NO_GAMES
        assert len(harness.engine.store) == 0
        assert harness.statuses[-1].text == "Error: No games found for this player"

    def test_fetch_without_adding(self):
        harness = RecordingEngine(routes=HIKARU_ROUTES)

        report = asyncio.run(harness.engine.fetch_player("hikaru", add_to_store=False))

        assert len(harness.engine.store) == 0
        assert set(b.value for b in report.histories) == {"blitz", "rapid"}

    def test_export_writes_files_and_extends_status(self, tmp_path):
        harness = RecordingEngine(routes=HIKARU_ROUTES)
        report = asyncio.run(harness.engine.fetch_player("hikaru"))

        written = harness.engine.export_player(report, tmp_path)

        assert sorted(p.name for p in written) == ["hikaru_blitz.csv", "hikaru_rapid.csv"]
        assert harness.status_texts[-1].endswith(" Downloaded 2 CSV files!")
        assert harness.status_texts[-1].startswith("Success!")

    def test_exported_files_reload_under_same_names(self, tmp_path):
        harness = RecordingEngine(routes=HIKARU_ROUTES)
        report = asyncio.run(harness.engine.fetch_player("hikaru", add_to_store=False))
        written = harness.engine.export_player(report, tmp_path)

        added = asyncio.run(harness.engine.load_paths(sorted(written)))

        assert added == ["hikaru blitz", "hikaru rapid"]
        assert harness.engine.store.get("hikaru blitz").points == report.histories[TimeControlBucket.BLITZ]


# =============================================================================
# STATE COMMANDS
# =============================================================================

class TestStateCommands:

    def test_remove_then_readd_gets_new_color(self):
        harness = RecordingEngine()
        asyncio.run(harness.engine.load_files([MAGNUS]))
        original = harness.engine.store.get("magnus").color

        assert harness.engine.remove_player("magnus") is True
        asyncio.run(harness.engine.load_files([MAGNUS]))

        assert original == PALETTE[0]
        assert harness.engine.store.get("magnus").color == PALETTE[1]

    def test_remove_absent_does_not_redraw(self):
        harness = RecordingEngine()

        assert harness.engine.remove_player("nobody") is False
        assert harness.views == []

    def test_window_restricts_every_dataset(self):
        harness = RecordingEngine()
        asyncio.run(harness.engine.load_files([MAGNUS, HIKARU_FILE]))

        view = harness.engine.set_window(DateWindow.parse("2024-01-15", "2024-03-01"))

        assert harness.views[-1] is view
        assert [d.point_count for d in view.datasets] == [1, 1]

        view = harness.engine.set_window(None)
        assert [d.point_count for d in view.datasets] == [2, 1]


class TestEngineConfig:

    def test_from_env_overrides(self, tmp_path):
        config = EngineConfig.from_env({
            "RATING_HISTORY_API_ROOT": "https://mirror.test/pub",
            "RATING_HISTORY_TIMEOUT": "7.5",
            "RATING_HISTORY_SAMPLES": str(tmp_path / "samples.json"),
        })

        assert config.fetcher.api_root == "https://mirror.test/pub"
        assert config.fetcher.timeout_seconds == 7.5
        assert config.samples_config == tmp_path / "samples.json"

    def test_defaults(self):
        config = EngineConfig.from_env({})

        assert config.fetcher.timeout_seconds == 30.0
        assert config.samples_config is None

    def test_bad_timeout_rejected(self):
        with pytest.raises(ValueError):
            EngineConfig.from_env({"RATING_HISTORY_TIMEOUT": "soon"})

    def test_default_engine_loads_bundled_samples(self):
        engine = RatingHistoryEngine()

        added = asyncio.run(engine.load_samples())

        assert added == ["magnus", "hikaru", "fabiano"]
