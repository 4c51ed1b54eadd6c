"""
Command-line access to a local feed's package index.

Examples:
    feed-index --base-path ./feed add Contoso.Tools 1.2.0
    feed-index --base-path ./feed list --id contoso.tools
    feed-index --base-path ./feed exists Contoso.Tools 1.2.0 --symbols
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from feed_index.config import Config, get_config
from feed_index.errors import FeedIndexError
from feed_index.identity import PackageIdentity, PackageVersion
from feed_index.index import PackageIndexFile

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser, using config values as defaults."""
    parser = argparse.ArgumentParser(
        prog="feed-index",
        description="Inspect and update the package index of a local feed.",
    )
    parser.add_argument(
        "--base-path",
        type=Path,
        default=config.storage.base_path,
        help="Root directory of the feed (defaults to config.storage.base_path).",
    )
    parser.add_argument(
        "--index-file",
        default=config.storage.index_file_name,
        help="Index document name under the base path.",
    )
    parser.add_argument(
        "--persist-when-empty",
        default=config.index.persist_when_empty,
        action=argparse.BooleanOptionalAction,
        help="Keep the index document when it becomes empty.",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help="Logging level (default: %(default)s).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("add", "Add a package to the index."),
        ("remove", "Remove a package from the index."),
        ("exists", "Exit 0 if the package is indexed, 1 otherwise."),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("package_id")
        sub.add_argument("version")
        sub.add_argument("--symbols", action="store_true", help="Use the symbols index.")

    list_parser = subparsers.add_parser("list", help="List indexed packages.")
    list_parser.add_argument("--id", dest="package_id", help="Only list this package id.")
    list_parser.add_argument("--symbols", action="store_true", help="Use the symbols index.")

    versions_parser = subparsers.add_parser("versions", help="List versions of a package.")
    versions_parser.add_argument("package_id")
    versions_parser.add_argument("--symbols", action="store_true", help="Use the symbols index.")

    return parser


async def run_command(args: argparse.Namespace, index: PackageIndexFile) -> int:
    """Execute a parsed command against an index and return the exit code."""
    if args.command in ("add", "remove", "exists"):
        identity = PackageIdentity(args.package_id, PackageVersion.parse(args.version))

        if args.command == "add":
            if args.symbols:
                await index.add_symbols_package(identity)
            else:
                await index.add_package(identity)
            logger.info("Added %s", identity)
            return EXIT_OK

        if args.command == "remove":
            if args.symbols:
                await index.remove_symbols_package(identity)
            else:
                await index.remove_package(identity)
            logger.info("Removed %s", identity)
            return EXIT_OK

        if args.symbols:
            found = await index.symbols_exists_identity(identity)
        else:
            found = await index.exists_identity(identity)
        print("found" if found else "not found")
        return EXIT_OK if found else EXIT_NOT_FOUND

    if args.command == "versions":
        if args.symbols:
            versions = await index.get_symbols_package_versions(args.package_id)
        else:
            versions = await index.get_package_versions(args.package_id)
        for version in versions:
            print(version.to_full_string())
        return EXIT_OK

    # list
    if args.package_id:
        if args.symbols:
            packages = await index.get_symbols_packages_by_id(args.package_id)
        else:
            packages = await index.get_packages_by_id(args.package_id)
    else:
        if args.symbols:
            packages = sorted(await index.get_symbols_packages())
        else:
            packages = sorted(await index.get_packages())
    for package in packages:
        print(f"{package.id} {package.version.to_full_string()}")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = get_config().model_copy(deep=True)
    args = build_parser(config).parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    config.storage.base_path = args.base_path
    config.storage.index_file_name = args.index_file
    config.index.persist_when_empty = args.persist_when_empty

    index = PackageIndexFile.from_config(config)
    try:
        return asyncio.run(run_command(args, index))
    except FeedIndexError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
