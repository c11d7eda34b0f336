"""Scan command: print resolved metadata for every image under some directories."""

from __future__ import annotations

import argparse
import logging
import sys

from errors import SlidepickError
from photo import ImageMetadata
from scan import run_scan

from . import add_jobs_arg, open_cache

logger = logging.getLogger(__name__)


def add_scan_subparser(subparsers: argparse._SubParsersAction) -> None:
    scan_parser = subparsers.add_parser(
        "scan",
        help="Print creation date and size of every image (one JSON object per line)",
    )
    scan_parser.add_argument(
        "directories",
        nargs="+",
        help="Directories to scan recursively",
    )
    add_jobs_arg(scan_parser)
    scan_parser.set_defaults(_cmd=cmd_scan)


def _print_record(metadata: ImageMetadata) -> None:
    sys.stdout.write(metadata.model_dump_json() + "\n")


def cmd_scan(args: argparse.Namespace) -> int:
    if args.jobs < 1:
        logger.error("--jobs must be at least 1")
        return 1

    try:
        cache = open_cache(args)
        count = run_scan(args.directories, cache, _print_record, concurrency=args.jobs)
    except (SlidepickError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Resolved %s images", count)
    return 0
