"""
Rating Ingestion Contracts

Immutable data structures for the rating ingestion pipeline.

BOUNDARY: Ingestion Layer
All file and archive data enters through these contracts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

from backend.contracts.base import SeriesPoints, TimeControlBucket


# =============================================================================
# ENUMS
# =============================================================================

class FetchStatus(Enum):
    """Status of a single archive request."""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"
    NETWORK_ERROR = "network_error"


class FetchErrorCode(Enum):
    """
    Failure families of a player fetch.

    TRANSPORT is recorded on failed ArchiveFetchResult entries and never raised.
    """
    PLAYER_NOT_FOUND = "player_not_found"
    NO_GAMES = "no_games"
    NETWORK = "network"
    TRANSPORT = "transport"


# =============================================================================
# ERRORS
# =============================================================================

class ParseError(Exception):
    """Reserved for parse failures; row-level problems are skipped instead."""
    pass


class FetchError(Exception):
    """Raised when a whole player fetch fails."""

    def __init__(
        self,
        code: FetchErrorCode,
        message: str,
        http_status: Optional[int] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class SourceFile:
    """A selected file: its name and decoded text."""
    name: str
    content: str


# =============================================================================
# FETCH RESULT CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class ArchiveFetchResult:
    """
    Result of one archive request (success or failure).

    Failed archives are FIRST-CLASS outputs, not exceptions.
    """
    url: str
    sequence: int
    attempted_at: datetime
    completed_at: datetime
    status: FetchStatus

    # On success
    games_count: int = 0
    samples_count: int = 0

    # On failure
    error_code: Optional[FetchErrorCode] = None
    error_message: Optional[str] = None
    http_status: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.status == FetchStatus.SUCCESS


@dataclass(frozen=True)
class FetchReport:
    """
    Outcome of a player fetch.

    `histories` holds only non-empty buckets, in bucket order.
    """
    username: str
    started_at: datetime
    completed_at: datetime
    histories: Dict[TimeControlBucket, SeriesPoints]
    archives: Tuple[ArchiveFetchResult, ...] = field(default_factory=tuple)

    @property
    def total_points(self) -> int:
        return sum(len(points) for points in self.histories.values())

    @property
    def skipped_archives(self) -> Tuple[ArchiveFetchResult, ...]:
        return tuple(a for a in self.archives if not a.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for a in self.archives if not a.success)

    def summary(self) -> str:
        """Human-readable success line."""
        controls = ', '.join(bucket.value for bucket in self.histories)
        return (
            f"Success! Found {self.total_points} data points across "
            f"{len(self.histories)} time controls ({controls})."
        )
