"""Combine the steps of a chain into one verdict and one message.

Chains read strictly left to right. Steps joined by AND form a segment, an OR
closes the current segment, and the chain passes when any segment passes:

    a AND b OR c AND d   ==   (a and b) or (c and d)

A step with no pending operator in the middle of a ledger is treated as AND
and rendered as ``[MISSING OP]`` so the defect stays visible in the output.
"""

from __future__ import annotations

from typing import Sequence

from fluentcheck.ledger import LogicalOp, Step
from fluentcheck.sentence import MISSING_OP, conjugate

NO_ASSERTIONS = "No assertions made"


def _op_text(op: LogicalOp | None) -> str:
    return op.value if op is not None else MISSING_OP


def _phrase(step: Step, subject: str) -> str:
    return conjugate(step.sentence, subject)


def _lead(subject: str, phrase: str) -> str:
    return f"{subject} {phrase}" if subject else phrase


def segments(steps: Sequence[Step]) -> list[list[int]]:
    """Group step indices into runs separated by OR operators."""
    if not steps:
        return []
    groups: list[list[int]] = []
    current = [0]
    for i in range(1, len(steps)):
        if steps[i - 1].pending_op is LogicalOp.OR:
            groups.append(current)
            current = [i]
        else:
            current.append(i)
    groups.append(current)
    return groups


def render(steps: Sequence[Step], subject: str = "") -> str:
    if not steps:
        return NO_ASSERTIONS
    parts = [_lead(subject, _phrase(steps[0], subject))]
    for prev, step in zip(steps, steps[1:]):
        parts.append(_op_text(prev.pending_op))
        parts.append(_phrase(step, subject))
    return " ".join(parts)


def evaluate(steps: Sequence[Step], subject: str = "") -> tuple[bool, str]:
    """Return ``(passed, message)`` for a ledger of steps."""
    if not steps:
        return True, NO_ASSERTIONS

    if len(steps) == 1:
        return steps[0].passed, render(steps, subject)

    if len(steps) == 2:
        first, second = steps
        if first.pending_op is LogicalOp.OR:
            passed = first.passed or second.passed
        else:
            passed = first.passed and second.passed
        return passed, render(steps, subject)

    passed = any(all(steps[i].passed for i in group) for group in segments(steps))
    return passed, render(steps, subject)
