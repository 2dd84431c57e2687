"""
Rating History CLI

Drives the engine from a terminal: load CSV files or bundled samples,
fetch a player, export CSVs, and print the projected chart.

Usage:
    rating-history --samples --start 2024-01-01 --end 2024-06-30
    rating-history --fetch hikaru --export-dir ./exports
"""

from __future__ import annotations
from dataclasses import replace
from pathlib import Path
from typing import List, Optional
import argparse
import asyncio
import logging
import sys

from backend.contracts.base import StatusLevel, StatusMessage
from backend.engine import EngineConfig, RatingHistoryEngine
from frontend.interaction.temporal import DateWindow
from frontend.visualization.chart import ChartView
from ingestion.contracts import FetchError

_PREFIX = {
    StatusLevel.INFO: "[*]",
    StatusLevel.SUCCESS: "[+]",
    StatusLevel.ERROR: "[!]",
}


def print_status(message: StatusMessage) -> None:
    print(f"{_PREFIX[message.level]} {message.text}")


def render_view(view: ChartView) -> List[str]:
    """One summary line per dataset."""
    lines = []
    if view.window is not None:
        lines.append(f"Window: {view.window.start.isoformat()} .. {view.window.end.isoformat()}")
    if not view.datasets:
        lines.append("No players loaded.")
    for dataset in view.datasets:
        line = f"{dataset.label:<24} {dataset.border_color}  {dataset.point_count:>5} points"
        if dataset.points:
            first, last = dataset.points[0], dataset.points[-1]
            line += f"  {first.x.isoformat()} {first.y} -> {last.x.isoformat()} {last.y}"
        lines.append(line)
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rating-history",
        description="Load, fetch and chart chess rating histories."
    )
    parser.add_argument("--csv", nargs="*", default=[], type=Path, metavar="FILE",
                        help="CSV files with a date,rating header.")
    parser.add_argument("--samples", action="store_true",
                        help="Load the bundled sample players.")
    parser.add_argument("--fetch", metavar="USERNAME",
                        help="Fetch a player's history from the remote API.")
    parser.add_argument("--export-dir", type=Path,
                        help="Write <username>_<bucket>.csv files for the fetched player.")
    parser.add_argument("--start", help="Window start (YYYY-MM-DD).")
    parser.add_argument("--end", help="Window end (YYYY-MM-DD).")
    parser.add_argument("--config", type=Path, help="Path to samples.json.")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    return parser


async def run(args: argparse.Namespace) -> int:
    try:
        config = EngineConfig.from_env()
    except ValueError as e:
        print(f"[!] {e}")
        return 2

    if args.config is not None:
        config.samples_config = args.config
    if args.timeout is not None:
        config.fetcher = replace(config.fetcher, timeout_seconds=args.timeout)

    engine = RatingHistoryEngine(config=config, status_sink=print_status)

    if args.samples:
        added = await engine.load_samples()
        print(f"[*] Loaded {len(added)} sample players.")

    if args.csv:
        added = await engine.load_paths(args.csv)
        print(f"[*] Loaded {len(added)} of {len(args.csv)} CSV files.")

    exit_code = 0
    if args.fetch is not None:
        try:
            report = await engine.fetch_player(args.fetch)
        except FetchError:
            report = None
        if report is None:
            exit_code = 1
        elif args.export_dir is not None:
            engine.export_player(report, args.export_dir)

    view = engine.set_window(DateWindow.parse(args.start, args.end))
    for line in render_view(view):
        print(line)
    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        print("\nStopped.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
