"""Command line entry point.

Loads configuration, runs one feed load and prints the formatted rows.

Usage:
    # Print the configured feed
    python main.py

    # Override the filter
    python main.py --min-magnitude 5 --start-time 2024-03-01 --end-time 2024-03-31

    # Machine-readable output in a fixed timezone
    python main.py --json --timezone UTC

    # Open the detail page of the first row
    python main.py --open 0

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
    LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import replace

from quakefeed.core.config import resolve_timezone
from quakefeed.core.formatter import format_row_line
from quakefeed.orchestrator import LoadStatus, Orchestrator
from quakefeed.shell.config_loader import load_config


logger = logging.getLogger(__name__)


EXIT_CODES = {
    LoadStatus.LOADED: 0,
    LoadStatus.EMPTY: 0,
    LoadStatus.FAILED: 1,
    LoadStatus.NO_CONNECTION: 2,
}


def _configure_logging() -> None:
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List earthquakes from the USGS event feed",
    )
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--order-by", help="Sort order (time, time-asc, magnitude, magnitude-asc)")
    parser.add_argument("--min-magnitude", help="Minimum magnitude")
    parser.add_argument("--max-magnitude", help="Maximum magnitude")
    parser.add_argument("--start-time", help="Start date, e.g. 2024-01-01")
    parser.add_argument("--end-time", help="End date, e.g. 2024-12-31")
    parser.add_argument("--timezone", help="IANA timezone for dates and times")
    parser.add_argument("--json", action="store_true", help="Print the feed state as JSON")
    parser.add_argument("--open", type=int, metavar="N", help="Open the detail page of row N")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one load and render it to stdout.

    Returns:
        Process exit code
    """
    _configure_logging()
    args = build_parser().parse_args(argv)

    config = load_config(args.config)

    overrides = {
        "order_by": args.order_by,
        "min_magnitude": args.min_magnitude,
        "max_magnitude": args.max_magnitude,
        "start_time": args.start_time,
        "end_time": args.end_time,
    }
    config.query = replace(
        config.query,
        **{key: value for key, value in overrides.items() if value is not None},
    )

    if args.timezone:
        try:
            resolve_timezone(args.timezone)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        config.display_timezone = args.timezone

    orchestrator = Orchestrator(config)
    try:
        state = orchestrator.load().result()

        if args.json:
            print(json.dumps(state.to_dict(), indent=2))
        elif state.rows:
            for row in state.rows:
                print(format_row_line(row))
        else:
            print(state.message)

        if args.open is not None:
            try:
                orchestrator.select(args.open)
            except IndexError:
                print(f"Error: no row {args.open}", file=sys.stderr)
                return 1
    finally:
        orchestrator.shutdown()

    return EXIT_CODES[state.status]


if __name__ == "__main__":
    sys.exit(main())
