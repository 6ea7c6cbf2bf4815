"""CLI argument parsing and subcommand dispatch."""

from __future__ import annotations

import argparse
import logging
import pathlib

from dupefinder.checker import DupeChecker
from dupefinder.config import create_config_interactive, load_config, merge_config_into_args
from dupefinder.logging import configure_logging
from dupefinder.report import format_group, format_size, sort_groups, total_wasted

logger = logging.getLogger(__name__)


def _add_scan_options(p: argparse.ArgumentParser) -> None:
    """Options shared by every subcommand that scans directories.

    Defaults are None so that config.toml can fill in what the command
    line leaves unset.
    """
    p.add_argument(
        "-r", "--recursive", action="store_true", default=None,
        help="Descend into subdirectories",
    )
    p.add_argument(
        "--skip-empty", action="store_true", default=None,
        help="Ignore zero-byte files",
    )
    p.add_argument(
        "--workers", type=int, default=None, metavar="N",
        help="Number of hashing threads (default: 1)",
    )
    p.add_argument(
        "--no-progress", dest="progress", action="store_false", default=None,
        help="Do not show a progress bar while hashing",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="dupefinder",
        description="Find files with identical content across directories, regardless of name.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument("--configure", action="store_true", help="Interactively create config.toml")
    sub = parser.add_subparsers(dest="command")

    # --- dupes ---
    p_dupes = sub.add_parser("dupes", help="Find all duplicates across directories")
    p_dupes.add_argument("directories", type=pathlib.Path, nargs="+", help="Directories to scan")
    _add_scan_options(p_dupes)

    # --- find ---
    p_find = sub.add_parser("find", help="Find duplicates of a single file")
    p_find.add_argument("file", type=pathlib.Path, help="File to look for")
    p_find.add_argument("directories", type=pathlib.Path, nargs="+", help="Directories to scan")
    _add_scan_options(p_find)

    return parser


def _make_checker(args: argparse.Namespace) -> DupeChecker:
    return DupeChecker(
        args.directories,
        recursive=args.recursive,
        chunk_size=args.chunk_size,
        workers=args.workers,
        skip_empty=args.skip_empty,
        progress=args.progress,
    )


def cmd_dupes(args: argparse.Namespace) -> int:
    """Find duplicates across all given directories."""
    checker = _make_checker(args)
    logger.info(f"Scanning {', '.join(checker.directories)} ...")
    results = checker.run()

    if not results:
        logger.info("No duplicates found.")
        return 0

    groups = sort_groups(results.values())
    logger.info(f"\nFound {len(groups)} duplicate group(s):\n")
    for i, group in enumerate(groups, 1):
        for line in format_group(i, group):
            logger.info(line)
        logger.info("")

    logger.info(f"{format_size(total_wasted(groups))} reclaimable.")
    return 0


def cmd_find(args: argparse.Namespace) -> int:
    """Find duplicates of one file within the given directories."""
    checker = _make_checker(args)
    try:
        group = checker.run_for_file(args.file)
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 1

    if group is None:
        logger.info(f"No duplicates found for {args.file}.")
        return 0

    logger.info(f"{len(group.files) - 1} duplicate(s) of {args.file} ({format_size(group.size)}):")
    for f in group.files[1:]:
        logger.info(f"    {f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.configure:
        create_config_interactive()
        return 0

    commands = {
        "dupes": cmd_dupes,
        "find": cmd_find,
    }

    cmd_func = commands.get(args.command)
    if cmd_func is None:
        parser.print_help()
        return 0

    merge_config_into_args(args, load_config())
    return cmd_func(args)
