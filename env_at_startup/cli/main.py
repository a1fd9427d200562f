"""Main CLI entry point for env-at-startup."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from env_at_startup.cli.commands import rollback_files, substitute_files
from env_at_startup.config import ConfigLoader, SubstitutionConfig
from env_at_startup.exceptions import ConfigValidationError
from env_at_startup.variables import AllowList


logger = logging.getLogger(__name__)

EPILOG = """\
Examples:
  env-at-startup dist/**.js --vars 'API_URL,NEXT_PUBLIC_*'
  env-at-startup dist/**.js --rollback
"""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the env-at-startup CLI."""
    parser = argparse.ArgumentParser(
        prog='env-at-startup',
        description='Replace process.env references in built files with values from the environment',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        'files',
        nargs='+',
        metavar='file',
        help='Files to process (usually expanded by the shell)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        default=None,
        help='Show all replacements'
    )
    parser.add_argument(
        '--vars',
        type=str,
        metavar='LIST',
        help='Only replace these vars. Comma separated list, wildcards (*) allowed'
    )
    parser.add_argument(
        '--no-progress',
        dest='progress',
        action='store_false',
        default=None,
        help='Do not display file by file progress'
    )
    parser.add_argument(
        '--allow-missing',
        action='store_true',
        default=None,
        help='Missing env vars are set to undefined'
    )
    parser.add_argument(
        '--allow-unreplaced', '--ignore-other',
        dest='allow_unreplaced',
        action='store_true',
        default=None,
        help='References outside --vars are left in place instead of failing'
    )
    parser.add_argument(
        '--rollback',
        action='store_true',
        help='Rollback all replacements'
    )
    parser.add_argument(
        '--config',
        type=str,
        metavar='PATH',
        help='Path to a YAML config file (command line flags take precedence)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        default=None,
        help='Enable debug logging'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )
    return parser


def setup_logging(log_level: str, debug: bool = False) -> None:
    """Configure root logging for a CLI run."""
    level = logging.DEBUG if debug else getattr(logging, log_level.upper())
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def resolve_config(parsed_args: argparse.Namespace) -> SubstitutionConfig:
    """
    Build the run configuration from the config file and command line flags.

    Raises:
        ConfigValidationError: If the config file is invalid
    """
    config = SubstitutionConfig()
    if parsed_args.config:
        config = ConfigLoader().load(Path(parsed_args.config), config)

    allow_list = AllowList.parse(parsed_args.vars) if parsed_args.vars is not None else None
    return config.with_overrides(
        verbose=parsed_args.verbose,
        allow_list=allow_list,
        allow_unreplaced=parsed_args.allow_unreplaced,
        allow_missing=parsed_args.allow_missing,
        progress=parsed_args.progress,
        rollback=parsed_args.rollback,
        debug=parsed_args.debug,
    )


def unique_paths(files: List[str]) -> List[str]:
    """Drop repeated paths (same real file), keeping first-seen order.

    Each file must be touched by exactly one operation per batch.
    """
    seen = set()
    unique = []
    for file in files:
        key = os.path.realpath(file)
        if key in seen:
            logger.debug(f"Ignoring repeated path: {file}")
            continue
        seen.add(key)
        unique.append(file)
    return unique


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        config = resolve_config(parsed_args)
    except ConfigValidationError as e:
        setup_logging(parsed_args.log_level)
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code

    setup_logging(parsed_args.log_level, config.debug)
    logger.debug(f"Resolved configuration: {config}")

    files = unique_paths(parsed_args.files)

    try:
        if config.rollback:
            return rollback_files(files, config)
        return substitute_files(files, config)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
