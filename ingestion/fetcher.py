"""
Archive History Fetcher

Fetches a player's monthly game archives and folds the games into
per-day rating series, one per time control.

PRINCIPLES:
===========
1. Archives are requested one at a time, in listed order
2. A failed archive is a first-class record, never fatal
3. Later games overwrite earlier ones on the same day
4. Index failures are terminal and raised as FetchError
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple
import logging

import httpx

from backend.contracts.base import (
    RatingSample, SeriesPoints, StatusLevel, StatusMessage, TimeControlBucket
)
from .contracts import (
    ArchiveFetchResult, FetchError, FetchErrorCode, FetchReport, FetchStatus
)

logger = logging.getLogger(__name__)

DEFAULT_API_ROOT = "https://api.chess.com/pub"
DEFAULT_USER_AGENT = "chess-rating-graphs/1.0"
DEFAULT_TIMEOUT_SECONDS = 30.0

STANDARD_RULES = "chess"

StatusCallback = Callable[[StatusMessage], None]


@dataclass(frozen=True)
class FetcherConfig:
    """Remote API settings."""
    api_root: str = DEFAULT_API_ROOT
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def archive_index_url(self, username: str) -> str:
        return f"{self.api_root.rstrip('/')}/player/{username}/games/archives"


class RemoteHistoryFetcher:
    """
    Fetches and folds rating history for one player.

    GUARANTEES:
    ===========
    1. Every archive request yields an ArchiveFetchResult
    2. Returned histories are ascending by date with unique days
    3. Empty buckets are omitted from the result
    """

    def __init__(
        self,
        config: Optional[FetcherConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_status: Optional[StatusCallback] = None
    ):
        self._config = config or FetcherConfig()
        self._transport = transport
        self._on_status = on_status

    @property
    def config(self) -> FetcherConfig:
        return self._config

    async def fetch(self, username: str) -> Dict[TimeControlBucket, SeriesPoints]:
        """Fetch histories keyed by time control; raises FetchError."""
        report = await self.fetch_report(username)
        return report.histories

    async def fetch_report(self, username: str) -> FetchReport:
        """
        Fetch a player and return the full report.

        Raises:
            FetchError: PLAYER_NOT_FOUND, NETWORK or NO_GAMES
        """
        username = username.strip()
        started_at = datetime.now(timezone.utc)
        self._emit("Fetching data...")

        days_by_bucket: Dict[TimeControlBucket, Dict[date, int]] = {
            bucket: {} for bucket in TimeControlBucket
        }
        results: List[ArchiveFetchResult] = []

        async with self._client() as client:
            archive_urls = await self._fetch_archive_index(client, username)
            self._emit(f"Found {len(archive_urls)} months of data. Processing...")

            for sequence, url in enumerate(archive_urls):
                result, games = await self._fetch_archive(client, url, sequence)
                if result.success:
                    folded = fold_games(games, username, days_by_bucket)
                    result = replace(result, samples_count=folded)
                results.append(result)

        histories = build_histories(days_by_bucket)
        if not histories:
            raise FetchError(
                FetchErrorCode.NO_GAMES,
                "No games found for this player"
            )

        report = FetchReport(
            username=username,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            histories=histories,
            archives=tuple(results)
        )
        self._emit(report.summary(), StatusLevel.SUCCESS)
        return report

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout_seconds),
            headers={'User-Agent': self._config.user_agent},
            transport=self._transport,
            follow_redirects=True
        )

    async def _fetch_archive_index(self, client: httpx.AsyncClient, username: str) -> List[str]:
        url = self._config.archive_index_url(username)

        try:
            response = await client.get(url)
        except httpx.TimeoutException as e:
            raise FetchError(
                FetchErrorCode.NETWORK,
                "Archive index request timed out"
            ) from e
        except httpx.RequestError as e:
            raise FetchError(
                FetchErrorCode.NETWORK,
                f"Could not reach archive index: {e}"
            ) from e
        except httpx.InvalidURL as e:
            raise FetchError(
                FetchErrorCode.PLAYER_NOT_FOUND,
                f"Invalid archive index URL: {e}"
            ) from e

        if not response.is_success:
            raise FetchError(
                FetchErrorCode.PLAYER_NOT_FOUND,
                f"Player not found or API error ({response.status_code})",
                http_status=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(
                FetchErrorCode.NETWORK,
                "Malformed archive index response"
            ) from e

        archives = payload.get('archives') if isinstance(payload, dict) else None
        urls = [u for u in archives if isinstance(u, str)] if isinstance(archives, list) else []
        if not urls:
            raise FetchError(
                FetchErrorCode.PLAYER_NOT_FOUND,
                "No game history found for this player"
            )
        return urls

    async def _fetch_archive(
        self,
        client: httpx.AsyncClient,
        url: str,
        sequence: int
    ) -> Tuple[ArchiveFetchResult, List[dict]]:
        """Request one archive. Never raises."""
        attempted_at = datetime.now(timezone.utc)

        try:
            response = await client.get(url)
        except httpx.TimeoutException:
            return self._failed(url, sequence, attempted_at, FetchStatus.TIMEOUT,
                                "Request timed out"), []
        except httpx.RequestError as e:
            return self._failed(url, sequence, attempted_at, FetchStatus.NETWORK_ERROR,
                                str(e)), []
        except httpx.InvalidURL as e:
            return self._failed(url, sequence, attempted_at, FetchStatus.PARSE_ERROR,
                                str(e)), []

        if not response.is_success:
            return self._failed(url, sequence, attempted_at, FetchStatus.HTTP_ERROR,
                                f"HTTP {response.status_code}",
                                http_status=response.status_code), []

        try:
            payload = response.json()
        except ValueError as e:
            return self._failed(url, sequence, attempted_at, FetchStatus.PARSE_ERROR,
                                str(e)), []

        games = payload.get('games') if isinstance(payload, dict) else None
        if not isinstance(games, list):
            return self._failed(url, sequence, attempted_at, FetchStatus.PARSE_ERROR,
                                "Archive has no games list"), []

        result = ArchiveFetchResult(
            url=url,
            sequence=sequence,
            attempted_at=attempted_at,
            completed_at=datetime.now(timezone.utc),
            status=FetchStatus.SUCCESS,
            games_count=len(games)
        )
        return result, games

    def _failed(
        self,
        url: str,
        sequence: int,
        attempted_at: datetime,
        status: FetchStatus,
        message: str,
        http_status: Optional[int] = None
    ) -> ArchiveFetchResult:
        logger.warning("Skipped archive: %s (%s)", url, message)
        return ArchiveFetchResult(
            url=url,
            sequence=sequence,
            attempted_at=attempted_at,
            completed_at=datetime.now(timezone.utc),
            status=status,
            error_code=FetchErrorCode.TRANSPORT,
            error_message=message,
            http_status=http_status
        )

    def _emit(self, text: str, level: StatusLevel = StatusLevel.INFO) -> None:
        if self._on_status is not None:
            self._on_status(StatusMessage(text=text, level=level))


# =============================================================================
# FOLDING (pure)
# =============================================================================

def extract_sample(game: object, username: str) -> Optional[Tuple[TimeControlBucket, RatingSample]]:
    """
    Read the player's post-game rating from one game record.

    Returns None for variants, unknown time classes, games where the
    player is on neither or both sides, and unusable ratings or times.
    """
    if not isinstance(game, dict) or game.get('rules') != STANDARD_RULES:
        return None

    bucket = TimeControlBucket.from_time_class(game.get('time_class'))
    if bucket is None:
        return None

    side = _acting_side(game, username)
    if side is None:
        return None

    rating = side.get('rating')
    if isinstance(rating, bool) or not isinstance(rating, int) or rating <= 0:
        return None

    day = _end_date(game.get('end_time'))
    if day is None:
        return None

    return bucket, RatingSample(date=day, rating=rating)


def fold_games(
    games: List[dict],
    username: str,
    days_by_bucket: Dict[TimeControlBucket, Dict[date, int]]
) -> int:
    """Fold games into day -> rating maps, last seen wins. Returns samples folded."""
    folded = 0
    for game in games:
        extracted = extract_sample(game, username)
        if extracted is None:
            continue
        bucket, sample = extracted
        days_by_bucket.setdefault(bucket, {})[sample.date] = sample.rating
        folded += 1
    return folded


def build_histories(
    days_by_bucket: Dict[TimeControlBucket, Dict[date, int]]
) -> Dict[TimeControlBucket, SeriesPoints]:
    """Turn day maps into ascending series, dropping empty buckets."""
    histories: Dict[TimeControlBucket, SeriesPoints] = {}
    for bucket in TimeControlBucket:
        days = days_by_bucket.get(bucket)
        if not days:
            continue
        histories[bucket] = tuple(
            RatingSample(date=day, rating=rating)
            for day, rating in sorted(days.items())
        )
    return histories


def _acting_side(game: dict, username: str) -> Optional[dict]:
    wanted = username.lower()
    matches = [
        side for side in (game.get('white'), game.get('black'))
        if isinstance(side, dict)
        and isinstance(side.get('username'), str)
        and side['username'].lower() == wanted
    ]
    if len(matches) != 1:
        return None
    return matches[0]


def _end_date(end_time: object) -> Optional[date]:
    if isinstance(end_time, bool) or not isinstance(end_time, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(end_time, tz=timezone.utc).date()
    except (OverflowError, OSError, ValueError):
        return None
