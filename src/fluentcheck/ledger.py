"""Ordered record of the steps of one assertion chain."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator

from fluentcheck.sentence import Sentence


class LogicalOp(str, Enum):
    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class Step:
    """One matcher call's outcome.

    Attributes:
        sentence: The rendered-ready phrase for this step.
        passed: Outcome with negation already applied.
        pending_op: How this step combines with the next one. ``None`` on the
            last step of a chain.
    """

    sentence: Sentence
    passed: bool
    pending_op: LogicalOp | None = None


@dataclass(frozen=True)
class StepLedger:
    """Append-only sequence of steps. Every mutation returns a new ledger."""

    steps: tuple[Step, ...] = ()

    def append(self, step: Step) -> StepLedger:
        return StepLedger(self.steps + (step,))

    def with_last_op(self, op: LogicalOp) -> StepLedger:
        """Set the pending operator of the last step. No-op when empty."""
        if not self.steps:
            return self
        last = replace(self.steps[-1], pending_op=op)
        return StepLedger(self.steps[:-1] + (last,))

    @property
    def last(self) -> Step | None:
        return self.steps[-1] if self.steps else None

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    def __bool__(self) -> bool:
        return bool(self.steps)
