#!/usr/bin/env python3
"""
Unified CLI for slidepick.

Usage:
    slidepick build                  # Write every slideshow in the config file
    slidepick build -c my.yaml -j 4  # Explicit config, 4 images in parallel
    slidepick scan <dir> [<dir>...]  # Print date/size of each image as JSON lines
    slidepick cache path [<image>]   # Show cache directory or an image's entry file
    slidepick cache show <image>     # Print the cached metadata for an image
"""

import argparse
import logging
import sys
from pathlib import Path

from logging_utils import configure_logging, add_logging_args
from cli.build import add_build_subparser
from cli.cache import add_cache_subparser
from cli.scan import add_scan_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slidepick",
        description="Select photos by creation date and aspect ratio for slideshows",
    )
    add_logging_args(parser)
    parser.add_argument(
        "--cache-dir",
        type=Path,
        help="Metadata cache directory (default: platform user cache dir)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_build_subparser(subparsers)
    add_scan_subparser(subparsers)
    add_cache_subparser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "cache" and args.cache_command is None:
        args._cache_parser.print_help()
        return 1

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
