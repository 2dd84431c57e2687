"""
Integration Test Fixtures

Fixed API payloads and a recording engine harness.
All fixtures are explicit - no random generation.
"""

from datetime import datetime, timezone
from typing import List

import httpx

from backend.engine import RatingHistoryEngine
from ingestion.fetcher import FetcherConfig, RemoteHistoryFetcher
from ingestion.registry import SampleRegistry
from ingestion.service import IngestionService


# =============================================================================
# API FIXTURES
# =============================================================================

API = "https://api.test/pub"
INDEX = f"{API}/player/hikaru/games/archives"
JAN = f"{API}/player/hikaru/games/2024/01"
FEB = f"{API}/player/hikaru/games/2024/02"


def epoch(year, month, day, hour=12):
    return int(datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp())


def hikaru_game(day, rating, time_class):
    return {
        "rules": "chess",
        "time_class": time_class,
        "end_time": epoch(*day),
        "white": {"username": "Hikaru", "rating": rating},
        "black": {"username": "opponent", "rating": 1500},
    }


HIKARU_ROUTES = {
    INDEX: {"archives": [JAN, FEB]},
    JAN: {"games": [
        hikaru_game((2024, 1, 10), 3250, "blitz"),
        hikaru_game((2024, 1, 10), 3260, "blitz"),
        hikaru_game((2024, 1, 12), 2780, "rapid"),
    ]},
    FEB: {"games": [
        hikaru_game((2024, 2, 2), 3270, "blitz"),
    ]},
}


def routes_transport(routes) -> httpx.MockTransport:
    def handler(request):
        value = routes.get(str(request.url))
        if value is None:
            return httpx.Response(404)
        if isinstance(value, httpx.Response):
            return value
        return httpx.Response(200, json=value)
    return httpx.MockTransport(handler)


# =============================================================================
# ENGINE HARNESS
# =============================================================================

class RecordingEngine:
    """Engine plus the views and status lines it emitted."""

    def __init__(self, routes=None, registry=None):
        self.views: List = []
        self.statuses: List = []
        fetcher = RemoteHistoryFetcher(
            config=FetcherConfig(api_root=API),
            transport=routes_transport(routes or {}),
            on_status=lambda message: self.engine.notify(message)
        )
        self.engine = RatingHistoryEngine(
            chart_sink=self.views.append,
            status_sink=self.statuses.append,
            ingestion=IngestionService(
                fetcher=fetcher,
                registry=registry or SampleRegistry(_sources=[])
            )
        )

    @property
    def status_texts(self) -> List[str]:
        return [s.text for s in self.statuses]
