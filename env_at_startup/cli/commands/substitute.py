"""Substitute command implementation."""

import logging
import os
import sys
from functools import partial
from typing import List, Mapping, Optional

from env_at_startup.cli import report
from env_at_startup.config import SubstitutionConfig
from env_at_startup.engine import BatchResult, OperationOutcome, run_batch, substitute


logger = logging.getLogger(__name__)


def substitute_files(
    files: List[str],
    config: SubstitutionConfig,
    env: Optional[Mapping[str, str]] = None
) -> int:
    """
    Substitute env references in all files and report the result.

    Args:
        files: Target file paths
        config: Resolved configuration
        env: Environment lookup (defaults to os.environ)

    Returns:
        Exit code (0 if every file succeeded, 1 otherwise)
    """
    env = os.environ if env is None else env

    def on_settled(index: int, path, outcome: OperationOutcome):
        if config.verbose and outcome.is_replaced:
            report.print_changes(path, outcome)
        if config.progress:
            report.print_update(path, outcome, verbose=config.verbose)

    logger.info(f"Substituting references in {len(files)} files")
    result: BatchResult = run_batch(files, partial(substitute, env=env, config=config), on_settled)
    if config.progress:
        print()

    if not result.ok:
        print(f"Substitution failed on {len(result.errors)}/{len(files)} files", file=sys.stderr)
        replaced = result.replaced
        if replaced:
            print()
            print(
                f"IMPORTANT: Some files were still updated. "
                f"Run with --rollback to undo changes on {len(replaced)} files."
            )
        print(file=sys.stderr)
        report.print_errors(result, config.progress)
        return 1

    report.print_substitution_summary(files, result)
    return 0
