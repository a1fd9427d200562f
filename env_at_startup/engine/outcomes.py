"""
Per-file operation outcomes.
Returned by the substitution and rollback engines and aggregated by the batch runner.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from env_at_startup.variables import Position


class OutcomeStatus(str, Enum):
    """Outcome tags. Values are the labels printed in progress output."""
    SKIPPED = "SKIPPED"
    UNTOUCHED = "UNTOUCHED"
    ROLLED_BACK = "ROLLEDBACK"
    NO_BACKUP = "NOBAK"
    REPLACED = "REPLACED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Change:
    """A single replaced reference, recorded for verbose reporting."""
    position: Position
    old: str
    new: str

    def __str__(self) -> str:
        return f"{self.position} {self.old} -> {self.new}"


@dataclass
class OperationOutcome:
    """Result of processing one file."""
    status: OutcomeStatus
    replacements: Dict[str, int] = field(default_factory=dict)  # REPLACED only
    count: int = 0  # REPLACED only
    changes: List[Change] = field(default_factory=list)  # REPLACED and verbose only
    error: Optional[BaseException] = None  # FAILED only

    @classmethod
    def skipped(cls) -> "OperationOutcome":
        return cls(OutcomeStatus.SKIPPED)

    @classmethod
    def untouched(cls) -> "OperationOutcome":
        return cls(OutcomeStatus.UNTOUCHED)

    @classmethod
    def rolled_back(cls) -> "OperationOutcome":
        return cls(OutcomeStatus.ROLLED_BACK)

    @classmethod
    def no_backup(cls) -> "OperationOutcome":
        return cls(OutcomeStatus.NO_BACKUP)

    @classmethod
    def replaced(cls, replacements: Dict[str, int], count: int,
                 changes: Optional[List[Change]] = None) -> "OperationOutcome":
        return cls(OutcomeStatus.REPLACED, replacements=dict(replacements),
                   count=count, changes=list(changes or []))

    @classmethod
    def failed(cls, error: BaseException) -> "OperationOutcome":
        return cls(OutcomeStatus.FAILED, error=error)

    @property
    def is_failed(self) -> bool:
        return self.status == OutcomeStatus.FAILED

    @property
    def is_replaced(self) -> bool:
        return self.status == OutcomeStatus.REPLACED
