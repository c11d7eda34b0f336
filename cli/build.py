"""Build command: write every configured slideshow playlist."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from errors import SlidepickError
from scan import run_build
from settings import get_config_path, load_config

from . import add_jobs_arg, open_cache

logger = logging.getLogger(__name__)


def add_build_subparser(subparsers: argparse._SubParsersAction) -> None:
    build_parser = subparsers.add_parser(
        "build",
        help="Build slideshow playlists from the config file",
    )
    build_parser.add_argument(
        "-c", "--config",
        type=Path,
        help=f"Config file (default: {get_config_path()})",
    )
    add_jobs_arg(build_parser)
    build_parser.set_defaults(_cmd=cmd_build)


def cmd_build(args: argparse.Namespace) -> int:
    if args.jobs < 1:
        logger.error("--jobs must be at least 1")
        return 1

    try:
        settings = load_config(args.config)
        cache = open_cache(args)
        results = run_build(settings, cache, concurrency=args.jobs)
    except (SlidepickError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    for stats in results:
        logger.info(
            "%-40s %s/%s images",
            stats["path"], stats["images_selected"], stats["images_found"],
        )
    return 0
