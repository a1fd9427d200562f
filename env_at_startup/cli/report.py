"""Console reporting for substitution and rollback runs."""

import sys
import traceback
from typing import Optional, Sequence, TextIO

from env_at_startup.engine import BatchResult, OperationOutcome, OutcomeStatus


SILENT_STATUSES = {OutcomeStatus.UNTOUCHED, OutcomeStatus.NO_BACKUP}


def print_update(path, outcome: OperationOutcome, verbose: bool = False, out: Optional[TextIO] = None):
    """Print the progress line for one settled file."""
    out = out or sys.stdout
    if outcome.status in SILENT_STATUSES:
        return
    if outcome.is_replaced:
        # Verbose mode already listed every change
        if not verbose:
            print(f" - {path} {outcome.status.value} {outcome.count}", file=out)
        return
    print(f" - {path} {outcome.status.value}", file=out)


def print_changes(path, outcome: OperationOutcome, out: Optional[TextIO] = None):
    """Print every recorded change of a replaced file."""
    out = out or sys.stdout
    print(path, file=out)
    for change in outcome.changes:
        print(str(change), file=out)
    print(file=out)


def print_substitution_summary(files: Sequence, result: BatchResult, out: Optional[TextIO] = None):
    """Print per-variable totals after a successful substitution run."""
    out = out or sys.stdout
    print(f"Finished substitution on {len(files)} files", file=out)
    totals = result.replacement_totals()
    for name, count in totals.items():
        print(f" - {name} replaced {count} times", file=out)
    if not totals:
        print("No strings replaced", file=out)


def print_rollback_summary(files: Sequence, result: BatchResult, out: Optional[TextIO] = None):
    """Print per-status counts after a successful rollback run."""
    out = out or sys.stdout
    print(f"Finished rollback on {len(files)} files", file=out)
    for status, count in result.status_counts().items():
        print(f" - {status.value} x{count}", file=out)


def print_errors(result: BatchResult, progress: bool, err: Optional[TextIO] = None):
    """Print the failed files (when progress did not show them) and the first error."""
    err = err or sys.stderr
    if not progress:
        print("Failed files:", file=err)
        for batch_error in result.errors:
            print(f" - {batch_error.path} ({batch_error.error})", file=err)
        print(file=err)

    first = result.errors[0].error
    print("The first error was:", file=err)
    print(''.join(traceback.format_exception(type(first), first, first.__traceback__)).rstrip(), file=err)
