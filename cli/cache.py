"""Cache CLI commands."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from errors import SlidepickError

from . import open_cache

logger = logging.getLogger(__name__)


def add_cache_subparser(subparsers: argparse._SubParsersAction) -> None:
    cache_parser = subparsers.add_parser(
        "cache",
        help="Inspect the metadata cache",
    )
    cache_subparsers = cache_parser.add_subparsers(
        dest="cache_command",
        help="Cache command",
    )

    path_parser = cache_subparsers.add_parser(
        "path",
        help="Print the cache directory, or the cache entry for an image",
    )
    path_parser.add_argument(
        "image",
        nargs="?",
        help="Image path exactly as it is scanned (e.g. photos/a.jpg)",
    )
    path_parser.set_defaults(_cmd=cmd_cache_path)

    show_parser = cache_subparsers.add_parser(
        "show",
        help="Print the cached metadata for an image",
    )
    show_parser.add_argument("image", help="Image path exactly as it is scanned")
    show_parser.set_defaults(_cmd=cmd_cache_show)

    cache_parser.set_defaults(_cache_parser=cache_parser)


def cmd_cache_path(args: argparse.Namespace) -> int:
    try:
        cache = open_cache(args)
    except SlidepickError as exc:
        logger.error("%s", exc)
        return 1

    if args.image:
        sys.stdout.write(f"{cache.cache_path(Path(args.image))}\n")
    else:
        sys.stdout.write(f"{cache.root}\n")
    return 0


def cmd_cache_show(args: argparse.Namespace) -> int:
    try:
        cache = open_cache(args)
    except SlidepickError as exc:
        logger.error("%s", exc)
        return 1

    metadata = asyncio.run(cache.get(Path(args.image)))
    if metadata is None:
        logger.error("No cache entry for %s", args.image)
        return 1
    sys.stdout.write(metadata.model_dump_json(indent=2) + "\n")
    return 0
