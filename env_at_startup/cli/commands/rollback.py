"""Rollback command implementation."""

import logging
import sys
from functools import partial
from typing import List

from env_at_startup.cli import report
from env_at_startup.config import SubstitutionConfig
from env_at_startup.engine import OperationOutcome, rollback, run_batch


logger = logging.getLogger(__name__)


def rollback_files(files: List[str], config: SubstitutionConfig) -> int:
    """Restore all files from their backups and report the result.

    Returns:
        Exit code (0 if every file succeeded, 1 otherwise)
    """

    def on_settled(index: int, path, outcome: OperationOutcome):
        if config.progress:
            report.print_update(path, outcome)

    logger.info(f"Rolling back {len(files)} files")
    result = run_batch(files, partial(rollback, config=config), on_settled)
    if config.progress:
        print()

    if not result.ok:
        print(f"Rollback failed on {len(result.errors)}/{len(files)} files", file=sys.stderr)
        print(file=sys.stderr)
        report.print_errors(result, config.progress)
        return 1

    report.print_rollback_summary(files, result)
    return 0
