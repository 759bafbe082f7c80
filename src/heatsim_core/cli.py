# src/heatsim_core/cli.py
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import HeatSimError
from .log_config import set_quiet
from .runner import run_from_file

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heatsim",
        description="Integrate the 3-D heat equation over a voxelized solid and write temperature snapshots.",
    )
    parser.add_argument("config", type=Path, help="Path to the YAML control script")
    parser.add_argument(
        "-t", "--threads",
        type=_positive_int,
        default=1,
        help="Number of worker threads (accepted for compatibility; integration is single-threaded).",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress progress output. Fatal errors are always reported.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point. Returns the process exit code."""
    args = build_arg_parser().parse_args(argv)
    set_quiet(args.quiet)
    if args.threads != 1:
        logger.debug(f"--threads={args.threads} requested; integration runs on a single thread.")

    try:
        result = run_from_file(args.config)
    except HeatSimError as e:
        print(str(e), file=sys.stderr)
        return 1

    logger.info(f"Done: t={result.final_time}, {len(result.snapshot_paths)} snapshot(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
