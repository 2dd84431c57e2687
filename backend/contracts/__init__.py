"""
Contracts Module

Explicit data types shared between the ingestion, state and
visualization layers. All inter-layer communication uses these types.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. Series bodies are always ascending by date
3. Status output is data, handed to an injected sink
"""

from .base import (
    RatingSample, Series, SeriesPoints, TimeControlBucket,
    StatusLevel, StatusMessage, parse_date,
)

__all__ = [
    'RatingSample', 'Series', 'SeriesPoints', 'TimeControlBucket',
    'StatusLevel', 'StatusMessage', 'parse_date',
]
