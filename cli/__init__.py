"""Command-line subcommands and the options they share."""

from __future__ import annotations

import argparse

import config
from sources import CacheStore


def add_jobs_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        default=config.DEFAULT_CONCURRENCY,
        metavar="N",
        help=f"Images resolved in parallel (default: {config.DEFAULT_CONCURRENCY})",
    )


def open_cache(args: argparse.Namespace) -> CacheStore:
    """Open the metadata cache, honoring the global --cache-dir option."""
    return CacheStore.open(getattr(args, "cache_dir", None))
