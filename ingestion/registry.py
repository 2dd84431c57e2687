"""
Sample Registry

Loads the list of bundled sample rating files from samples.json.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import json
from pathlib import Path

from .parser import player_name_from_source

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'config' / 'samples.json'


@dataclass(frozen=True)
class SampleSource:
    """One bundled sample file."""
    path: Path

    @property
    def player_name(self) -> str:
        return player_name_from_source(self.path.name)


@dataclass
class SampleRegistry:
    """
    Registry of bundled sample files.

    Loads from config/samples.json. A missing config yields an empty registry.
    """

    _sources: List[SampleSource]

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'SampleRegistry':
        """Load registry from samples.json."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path)

        if not config_path.exists():
            return cls(_sources=[])

        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        # Relative paths resolve against the project root
        root = config_path.resolve().parent.parent
        base_dir = Path(config.get('base_dir', 'data'))
        if not base_dir.is_absolute():
            base_dir = root / base_dir

        sources = []
        for entry in config.get('samples', []):
            path = Path(entry)
            if not path.is_absolute():
                path = base_dir / path
            sources.append(SampleSource(path=path))

        return cls(_sources=sources)

    def paths(self) -> List[Path]:
        return [source.path for source in self._sources]

    @property
    def total_count(self) -> int:
        return len(self._sources)

    def stats(self) -> dict:
        """Get registry statistics."""
        return {
            'total': self.total_count,
            'players': [source.player_name for source in self._sources]
        }
