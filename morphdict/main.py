#!/usr/bin/env python3
# Path: morphdict/main.py
"""
morphdict - Main Entry Point

Command line tool for packaging and checking dictionary resources.

Data Flow:
    INPUT:   resource directory or bundle (configured provider)
    PROCESS: container resolution, dictionary assembly
    OUTPUT:  resource bundle, console summary

Usage:
    python -m morphdict.main pack SOURCE_DIR OUTPUT [--algorithm deflate]
    python -m morphdict.main inspect [--temporary] [--profile]
    python -m morphdict.main verify

Prerequisites:
    - Configured .env file (MORPHDICT_PROVIDER and its location)
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config_loader import ConfigLoader
from .constants import (
    CompressionAlgorithm,
    EXIT_CONFIG_ERROR,
    EXIT_LOAD_FAILURE,
    EXIT_OK,
    NO_COMPRESSION,
    STATUS_FAIL,
    STATUS_INFO,
    STATUS_OK,
)
from .core.logger import setup_ipo_logging, get_input_logger
from .core.memory import take_snapshot
from .models.error import LoadError
from .output.bundle_builder import BundleBuilder
from .output.summary import summarize
from .process.loader import build_loader


def run_pack(args: argparse.Namespace, config: ConfigLoader, logger) -> int:
    """
    Package a resource directory into a bundle.

    Args:
        args: Parsed arguments (source_dir, output, algorithm)
        config: Configuration loader
        logger: Logger instance

    Returns:
        Exit code
    """
    algorithm = args.algorithm or config.get('compress_algorithm')
    builder = BundleBuilder(Path(args.source_dir), algorithm=algorithm)
    manifest = builder.build(Path(args.output))

    print(f"\n{STATUS_OK} Bundle written: {args.output}")
    print(f"  Dictionary: {manifest.dictionary_name}")
    print(f"  Algorithm:  {manifest.algorithm}")
    print(f"  Size:       {manifest.total_size} -> {manifest.total_stored_size} bytes")
    print()
    logger.info(f"Packed {args.source_dir} into {args.output}")
    return EXIT_OK


def run_inspect(args: argparse.Namespace, config: ConfigLoader, logger) -> int:
    """
    Load the configured dictionary and print its summary.

    Args:
        args: Parsed arguments (temporary, profile)
        config: Configuration loader
        logger: Logger instance

    Returns:
        Exit code
    """
    loader = build_loader(config)
    before = take_snapshot() if args.profile else None

    dictionary = loader.load_temporary() if args.temporary else loader.load()
    mode = 'temporary' if args.temporary else 'cached'

    print(f"\n{STATUS_OK} Loaded ({mode}) from {loader.provider.describe()}\n")
    print(summarize(dictionary).format_text())

    stats = loader.resolver.stats
    print(
        f"\n{STATUS_INFO} Resolver: {stats.decompressions} decompressed, "
        f"{stats.passthroughs} raw, {stats.fallbacks} fallbacks"
    )

    if before is not None:
        after = take_snapshot()
        print(f"{STATUS_INFO} {after}")
        print(f"{STATUS_INFO} RSS delta: {after.delta(before):+.1f}MB")

    print()
    logger.info(f"Inspected {dictionary.name} ({mode})")
    return EXIT_OK


def run_verify(args: argparse.Namespace, config: ConfigLoader, logger) -> int:
    """
    Load through both paths and check they agree.

    Returns:
        EXIT_OK when both dictionaries are equal, EXIT_LOAD_FAILURE otherwise
    """
    loader = build_loader(config)
    cached = loader.load()
    temporary = loader.load_temporary()

    if cached != temporary:
        print(f"\n{STATUS_FAIL} Cached and temporary loads differ\n")
        logger.error('Cached and temporary dictionaries differ')
        return EXIT_LOAD_FAILURE

    print(f"\n{STATUS_OK} Cached and temporary loads are identical ({cached.name})\n")
    logger.info(f"Verified {cached.name}")
    return EXIT_OK


COMMANDS = {
    'pack': run_pack,
    'inspect': run_inspect,
    'verify': run_verify,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog='morphdict',
        description='Package and inspect morphological dictionary resources',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    pack = subparsers.add_parser('pack', help='Build a resource bundle')
    pack.add_argument('source_dir', help='Directory with raw artifacts and metadata.json')
    pack.add_argument('output', help='Bundle file to write')
    pack.add_argument(
        '--algorithm',
        choices=[a.name.lower() for a in CompressionAlgorithm] + [NO_COMPRESSION],
        default=None,
        help='Container algorithm (default: MORPHDICT_COMPRESS_ALGORITHM)',
    )

    inspect = subparsers.add_parser('inspect', help='Load and summarize the dictionary')
    inspect.add_argument('--temporary', action='store_true', help='Use the uncached load path')
    inspect.add_argument('--profile', action='store_true', help='Report process memory')

    subparsers.add_parser('verify', help='Check cached and temporary loads agree')
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 ok, 1 load failure, 2 configuration error)
    """
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader()
    except ValueError as e:
        print(f"\n{STATUS_FAIL} Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=config.get('log_level'),
        console_output=config.get('log_console'),
    )
    logger = get_input_logger('cli')
    logger.info(f"morphdict {args.command} ({config})")

    try:
        return COMMANDS[args.command](args, config, logger)
    except ValueError as e:
        print(f"\n{STATUS_FAIL} Configuration error: {e}", file=sys.stderr)
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR
    except LoadError as e:
        print(f"\n{STATUS_FAIL} {type(e).__name__}: {e}", file=sys.stderr)
        return EXIT_LOAD_FAILURE


if __name__ == '__main__':
    sys.exit(main())
