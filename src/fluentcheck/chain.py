from __future__ import annotations

import logging
import reprlib
from typing import Any

from fluentcheck import evaluator
from fluentcheck.finalization import ScopeSlot, current_scope
from fluentcheck.ledger import LogicalOp, Step, StepLedger
from fluentcheck.matchers import Matchers
from fluentcheck.reporter import REPORTER
from fluentcheck.result import ChainResult
from fluentcheck.sentence import Sentence

logger = logging.getLogger(__name__)


class Chain(Matchers):
    """A value under test plus the assertion steps recorded against it.

    Chains are used as values: every matcher call and modifier returns a new
    chain and marks this one as consumed, so only the newest value of an
    expression is ever evaluated automatically.

    Attributes:
        value: The tested value. Only matchers read it; released once the
            chain is reported.
        expr_text: Text naming the value in rendered sentences.
        negated: Applies to the next appended step only.
        ledger: Steps recorded so far.
        in_chain: True once a step or modifier has been applied.
        is_final: False right after ``and_()``/``or_()``, True otherwise.
        consumed: A successor chain has taken over.
        reported: The chain was evaluated and sent to the reporter.
    """

    def __init__(
        self,
        value: Any,
        expr_text: str,
        *,
        negated: bool = False,
        ledger: StepLedger | None = None,
        in_chain: bool = False,
        is_final: bool = True,
        slot: ScopeSlot | None = None,
    ) -> None:
        self.value = value
        self.expr_text = expr_text
        self.negated = negated
        self.ledger = ledger if ledger is not None else StepLedger()
        self.in_chain = in_chain
        self.is_final = is_final
        self.consumed = False
        self.reported = False
        self._verdict: bool | None = None

        active = current_scope()
        self._slot: ScopeSlot | None = None
        if slot is not None and slot.scope is active:
            slot.chain = self
            self._slot = slot
        elif active is not None:
            self._slot = active.register(self)

    def __repr__(self) -> str:
        state = "final" if self.is_final else "intermediate"
        return f"<Chain {self.expr_text!r} steps={len(self.ledger)} {state}>"

    def _successor(self, **changes: Any) -> Chain:
        fields: dict[str, Any] = {
            "negated": self.negated,
            "ledger": self.ledger,
            "in_chain": self.in_chain,
            "is_final": self.is_final,
        }
        fields.update(changes)
        self.consumed = True
        return Chain(self.value, self.expr_text, slot=self._slot, **fields)

    def add_step(self, sentence: Sentence, passed: bool, *, negatable: bool = True) -> Chain:
        """Record one matcher outcome and return the chain to continue with.

        The pending ``not_()`` is applied to ``passed`` and to the sentence,
        then cleared. ``negatable=False`` records the outcome as given, for
        steps that must fail whatever the negation (broken matcher input).
        """
        sentence = sentence.with_negation(self.negated).with_subject(self.expr_text)
        outcome = bool(passed)
        if self.negated and negatable:
            outcome = not outcome

        ledger = self.ledger
        last = ledger.last
        if last is not None and last.pending_op is None:
            # two matchers back to back read as AND
            ledger = ledger.with_last_op(LogicalOp.AND)

        return self._successor(
            negated=False,
            ledger=ledger.append(Step(sentence, outcome)),
            in_chain=True,
            is_final=True,
        )

    def not_(self) -> Chain:
        return self._successor(negated=not self.negated)

    def _join(self, op: LogicalOp) -> Chain:
        self.is_final = False
        return self._successor(
            ledger=self.ledger.with_last_op(op), in_chain=True, is_final=False
        )

    def and_(self) -> Chain:
        return self._join(LogicalOp.AND)

    def or_(self) -> Chain:
        return self._join(LogicalOp.OR)

    def result(self) -> ChainResult:
        """Evaluate the steps without reporting anything."""
        passed, message = evaluator.evaluate(self.ledger.steps, self.expr_text)
        return ChainResult(
            expr_text=self.expr_text,
            steps=self.ledger.steps,
            passed=passed,
            message=message,
        )

    def evaluate(self) -> bool:
        """Evaluate and report this chain now, whatever its finality.

        A chain is reported once; later calls return the first verdict. An
        empty chain passes without touching the session.
        """
        if self.reported:
            return bool(self._verdict)

        result = self.result()
        if not result.steps:
            return True

        self.reported = True
        self._verdict = result.passed
        self.value = None
        logger.debug(f"Evaluated '{result.message}': passed={result.passed}")
        REPORTER.on_result(result.passed, result)
        return result.passed


def expect(value: Any, expr: str | None = None) -> Chain:
    """Wrap ``value`` for fluent assertions.

    ``expr`` names the value in messages; defaults to a shortened repr.
    """
    return Chain(value, expr if expr is not None else reprlib.repr(value))


def expect_not(value: Any, expr: str | None = None) -> Chain:
    return expect(value, expr).not_()
