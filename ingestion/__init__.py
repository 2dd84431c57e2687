"""
Ingestion Layer

Parses CSV rating files, fetches remote game archives, and exports
series back to CSV. Outputs canonical ascending RatingSample tuples.
"""

from .contracts import (
    FetchStatus, FetchErrorCode, ParseError, FetchError,
    SourceFile, ArchiveFetchResult, FetchReport,
)
from .parser import parse_series, player_name_from_source
from .fetcher import RemoteHistoryFetcher, FetcherConfig
from .export import encode_series, export_filename, write_exports
from .registry import SampleRegistry, SampleSource
from .service import IngestionService, IngestedSeries, series_name

__all__ = [
    'FetchStatus', 'FetchErrorCode', 'ParseError', 'FetchError',
    'SourceFile', 'ArchiveFetchResult', 'FetchReport',
    'parse_series', 'player_name_from_source',
    'RemoteHistoryFetcher', 'FetcherConfig',
    'encode_series', 'export_filename', 'write_exports',
    'SampleRegistry', 'SampleSource',
    'IngestionService', 'IngestedSeries', 'series_name',
]
