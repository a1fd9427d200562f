"""
Engine module.
Per-file substitution and rollback, and the concurrent batch runner.
"""

from .outcomes import Change, OperationOutcome, OutcomeStatus
from .substitution import substitute, render
from .rollback import rollback
from .batch import BatchError, BatchResult, run_all, run_batch

__all__ = [
    "Change",
    "OperationOutcome",
    "OutcomeStatus",
    "substitute",
    "render",
    "rollback",
    "BatchError",
    "BatchResult",
    "run_all",
    "run_batch",
]
