"""CLI entry point for batch label generation.

Usage:
    python -m labelgen data/ticks_data.csv
    python -m labelgen data/ticks_data.csv --timeframe 5m --warmup-bars 255
    python -m labelgen data/ticks_data.csv --config labels.yaml --workers 4 -o report.json
    python -m labelgen data/ticks_data.csv --labels-out data/labels.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from labelcore.timeframe import TIMEFRAME_SECONDS
from labelgen.config import get_settings, load_label_config
from labelgen.report import ReportFormatter
from labelgen.runner import LabelRunConfig, LabelRunner
from labelgen.stats import LabelStatisticsCalculator
from labelgen.tick_source import CsvTickSource, TickSource
from labelgen.validation import validate_ticks


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Generate trailing-stop training labels from bid/ask ticks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m labelgen data/ticks_data.csv
  python -m labelgen data/ticks_data.csv --timeframe 5m --warmup-bars 255
  python -m labelgen data/ticks_data.csv --config labels.yaml --workers 4 -o report.json
  python -m labelgen data/ticks_data.csv --labels-out data/labels.csv
        """,
    )
    parser.add_argument(
        "ticks",
        nargs="?",
        default=settings.tick_file,
        help=f"Tick CSV file with timestamp,bid,ask columns (default: {settings.tick_file})",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=settings.config_file,
        help=f"YAML label config (default: {settings.config_file})",
    )
    parser.add_argument(
        "--timeframe",
        type=str,
        default=settings.timeframe,
        choices=list(TIMEFRAME_SECONDS),
        help=f"Bar period defining decision points (default: {settings.timeframe})",
    )
    parser.add_argument(
        "--warmup-bars",
        type=int,
        default=settings.warmup_bars,
        help=f"Decision points to skip at the start (default: {settings.warmup_bars})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=settings.workers,
        help=f"Worker processes (default: {settings.workers})",
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Tick CSV has no header row",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path for JSON results",
    )
    parser.add_argument(
        "--labels-out",
        type=str,
        default=None,
        help="Output file path for the per-decision-point labels CSV",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    tick_path = Path(args.ticks)
    if not tick_path.exists():
        print(f"Error: tick data file not found: {tick_path}")
        return 1

    try:
        label_config = load_label_config(Path(args.config))
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: invalid label config {args.config}: {e}")
        return 1

    try:
        run_config = LabelRunConfig(
            label=label_config,
            timeframe=args.timeframe,
            warmup_bars=args.warmup_bars,
            workers=args.workers,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"\nLoading ticks from {tick_path}...")
    source: TickSource = CsvTickSource(tick_path, has_header=not args.no_header)
    ticks = source.load()

    quality = validate_ticks(ticks, label_config.pip_size)

    print("Generating labels...")
    result = LabelRunner(run_config).run(ticks)

    stats = LabelStatisticsCalculator().calculate(result.results)
    ReportFormatter.print_console(stats, label_config, quality)

    if args.output:
        ReportFormatter.save_json(stats, args.output, label_config, quality)

    if args.labels_out:
        ReportFormatter.save_labels_csv(result, args.labels_out)

    return 0


if __name__ == "__main__":
    sys.exit(main())
