"""
CSV Export

Serializes canonical series back to `date,rating` text and writes one
file per time control.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Sequence

from backend.contracts.base import RatingSample, TimeControlBucket

CSV_HEADER = "date,rating"


def encode_series(points: Sequence[RatingSample]) -> str:
    """Header line, then one `YYYY-MM-DD,rating` line per sample in order."""
    rows = '\n'.join(f"{p.date.isoformat()},{p.rating}" for p in points)
    return f"{CSV_HEADER}\n{rows}"


def export_filename(username: str, bucket: TimeControlBucket) -> str:
    return f"{username}_{bucket.value}.csv"


def write_exports(
    histories: Dict[TimeControlBucket, Sequence[RatingSample]],
    username: str,
    directory: Path
) -> List[Path]:
    """Write one CSV per non-empty bucket. Returns the written paths."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for bucket, points in histories.items():
        if not points:
            continue
        path = directory / export_filename(username, bucket)
        path.write_text(encode_series(points), encoding='utf-8')
        written.append(path)
    return written
