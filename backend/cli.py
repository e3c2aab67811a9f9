"""Command-line entry point: filter a unified diff from stdin or a file"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from services.config_manager import ConfigManager
from services.diff_parser import DiffParseError, parse_file_diffs
from services.diff_serializer import render_file_diffs
from services.logging_setup import LOG_LEVELS, setup_logging
from services.noise_filter import NoiseFilter

logger = logging.getLogger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diff-noise-filter",
        description="Drop hunks that only contain known mechanical renames from a unified diff",
    )
    parser.add_argument("input", nargs="?", default="-", help="Diff file to read (default: stdin)")
    parser.add_argument("-o", "--output", help="Write the filtered diff here (default: stdout)")
    parser.add_argument(
        "--no-filter",
        action="store_true",
        help="Only parse and re-render the diff (round-trip check)",
    )
    parser.add_argument("--stats", action="store_true", help="Log how much was filtered to stderr")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the configured log level",
    )
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    # newline="" keeps CRLF line endings intact
    with open(source, encoding="utf-8", newline="") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = args.log_level or ConfigManager.get_instance().get_config()["logging"]["level"]
    setup_logging(level)
    if args.stats:
        logger.setLevel(min(logger.level, logging.INFO))

    if args.input != "-" and not Path(args.input).exists():
        print(f"ERROR: file not found: {args.input}", file=sys.stderr)
        return 2

    diff_text = _read_input(args.input)

    try:
        if args.no_filter:
            output = render_file_diffs(parse_file_diffs(diff_text))
        else:
            result = NoiseFilter().filter_diff(diff_text)
            output = result.diff
            if args.stats:
                stats = result.stats
                logger.info(
                    "Elided %d of %d changed blocks; kept %d/%d hunks in %d/%d files",
                    stats.changed_blocks_elided,
                    stats.changed_blocks_total,
                    stats.hunks_kept,
                    stats.hunks_total,
                    stats.files_kept,
                    stats.files_total,
                )
    except DiffParseError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8", newline="") as f:
            f.write(output)
    else:
        sys.stdout.write(output)
        sys.stdout.flush()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
