"""
State Layer

Responsibility:
In-session ownership of loaded series.

PRINCIPLES:
1. Series are immutable once stored
2. No Parsing Logic
3. No Rendering Logic
"""

from .store import SeriesStore, PALETTE

__all__ = ['SeriesStore', 'PALETTE']
