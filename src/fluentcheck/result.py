"""Value-independent records of evaluated chains."""

from __future__ import annotations

from dataclasses import dataclass, field

from fluentcheck.ledger import Step


@dataclass(frozen=True)
class ChainResult:
    """Result of evaluating a single assertion chain.

    Attributes:
        expr_text: Source-expression text of the tested value (e.g. "value").
        steps: Every recorded step in append order, negation already applied.
        passed: Overall verdict of the chain.
        message: Human-readable rendering of the whole chain
            (e.g. "value is greater than 30 AND is even").

    Instances are hashable and compare structurally, so a result doubles as
    its own deduplication key.
    """

    expr_text: str
    steps: tuple[Step, ...]
    passed: bool
    message: str

    @property
    def primary_sentence(self) -> str:
        """The first step's phrase, used as the short failure message."""
        if not self.steps:
            return f"Assertion failed: {self.expr_text}"
        return self.steps[0].sentence.format()


@dataclass
class Session:
    """Pass/fail tallies collected on one thread since the last summary."""

    passed_count: int = 0
    failed_count: int = 0
    failures: list[ChainResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed_count + self.failed_count


class ChainAssertionError(AssertionError):
    """Raised when an evaluated chain does not hold."""

    def __init__(self, message: str, result: ChainResult) -> None:
        super().__init__(message)
        self.result = result
