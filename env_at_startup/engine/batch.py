"""
Batch runner.
Runs one engine operation over many files concurrently and collects the outcomes.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Union

from env_at_startup.engine.outcomes import OperationOutcome, OutcomeStatus


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
Operation = Callable[[PathLike], Awaitable[OperationOutcome]]
SettledCallback = Callable[[int, PathLike, OperationOutcome], None]


@dataclass
class BatchError:
    """A failed file, keyed by its position in the input list."""
    index: int
    path: PathLike
    error: BaseException


@dataclass
class BatchResult:
    """Aggregated outcomes, ordered like the input paths."""
    outcomes: List[OperationOutcome] = field(default_factory=list)
    errors: List[BatchError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def replaced(self) -> List[OperationOutcome]:
        return [outcome for outcome in self.outcomes if outcome.is_replaced]

    def replacement_totals(self) -> Dict[str, int]:
        """Sum per-variable replacement counts over all files."""
        totals: Dict[str, int] = {}
        for outcome in self.replaced:
            for name, count in outcome.replacements.items():
                totals[name] = totals.get(name, 0) + count
        return totals

    def status_counts(self) -> Dict[OutcomeStatus, int]:
        """Count outcomes per status, in first-seen order."""
        counts: Dict[OutcomeStatus, int] = {}
        for outcome in self.outcomes:
            counts[outcome.status] = counts.get(outcome.status, 0) + 1
        return counts


async def run_all(
    paths: Sequence[PathLike],
    operation: Operation,
    on_settled: Optional[SettledCallback] = None
) -> BatchResult:
    """
    Run operation for every path concurrently and wait for all of them.

    A failure (returned or raised) in one file never cancels the others.

    Args:
        paths: Target files
        operation: Coroutine function taking a path and returning an outcome
        on_settled: Optional progress callback, called as each file completes

    Returns:
        BatchResult with outcomes in input order
    """

    async def settle(index: int, path: PathLike) -> OperationOutcome:
        try:
            outcome = await operation(path)
        except Exception as e:
            logger.debug(f"Operation raised for {path}: {e}")
            outcome = OperationOutcome.failed(e)

        if on_settled is not None:
            on_settled(index, path, outcome)
        return outcome

    outcomes = await asyncio.gather(*(settle(i, path) for i, path in enumerate(paths)))

    result = BatchResult(outcomes=list(outcomes))
    for index, (path, outcome) in enumerate(zip(paths, outcomes)):
        if outcome.is_failed:
            result.errors.append(BatchError(index=index, path=path, error=outcome.error))

    logger.debug(f"Batch finished: {len(outcomes)} files, {len(result.errors)} failed")
    return result


def run_batch(
    paths: Sequence[PathLike],
    operation: Operation,
    on_settled: Optional[SettledCallback] = None
) -> BatchResult:
    """Synchronous wrapper around run_all."""
    return asyncio.run(run_all(paths, operation, on_settled))
