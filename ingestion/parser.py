"""
CSV Series Parser

Converts delimited rating text into canonical ascending series.

PRINCIPLES:
===========
1. Parse with maximum tolerance: malformed rows are skipped, never raised
2. Header line is always skipped
3. No deduplication at this stage
"""

from __future__ import annotations
from pathlib import PurePath
from typing import List, Optional
import logging
import re

from backend.contracts.base import RatingSample, SeriesPoints, parse_date

logger = logging.getLogger(__name__)

_PLAYER_PREFIX = re.compile(r'^player\d+_')
_EXTENSION = re.compile(r'\.csv$', re.IGNORECASE)
_INTEGER = re.compile(r'^[+-]?\d+$')


def parse_series(text: str) -> SeriesPoints:
    """
    Parse `date,rating` text into samples sorted ascending by date.

    Rows missing a field, with a non-integer or negative rating, or with
    an unparseable date are dropped.
    """
    lines = text.strip().splitlines()
    samples: List[RatingSample] = []
    skipped = 0

    for line in lines[1:]:
        sample = _parse_row(line)
        if sample is None:
            skipped += 1
            continue
        samples.append(sample)

    if skipped:
        logger.debug("Skipped %d malformed rows", skipped)

    # Stable: same-day rows keep file order
    samples.sort(key=lambda s: s.date)
    return tuple(samples)


def _parse_row(line: str) -> Optional[RatingSample]:
    date_field, sep, rating_field = line.partition(',')
    date_field = date_field.strip()
    rating_field = rating_field.strip()
    if not sep or not date_field or not rating_field:
        return None

    if not _INTEGER.match(rating_field):
        return None
    rating = int(rating_field)
    if rating < 0:
        return None

    day = parse_date(date_field)
    if day is None:
        return None

    return RatingSample(date=day, rating=rating)



def player_name_from_source(source: str) -> str:
    """
    Derive a display name from a file name or path.

    `data/player1_magnus_carlsen.csv` -> `magnus carlsen`
    """
    name = PurePath(source).name
    name = _EXTENSION.sub('', name)
    name = _PLAYER_PREFIX.sub('', name)
    return name.replace('_', ' ')
