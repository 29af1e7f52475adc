"""Automatic evaluation of chains when their scope closes.

A chain created by ``expect()`` registers with the innermost open scope of the
current thread. Each matcher call or modifier hands the chain over to a
successor and marks the predecessor consumed, so only the last value of an
expression is still live when the scope closes. That value is evaluated if it
is final (its last call was a matcher, not ``and_()``/``or_()``), has steps,
and was not already evaluated explicitly.

    with scope():
        expect(value).to_be_greater_than(30).and_().to_be_even()
    # evaluated and reported here

When an exception leaves the scope, final chains are still recorded but do
not raise, so the original exception propagates. Interrupts such as
KeyboardInterrupt skip evaluation altogether. A thread-local guard stops
chains created during an evaluation (for example by a renderer) from being
finalized recursively.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, TYPE_CHECKING

from fluentcheck.reporter import REPORTER

if TYPE_CHECKING:
    from fluentcheck.chain import Chain

logger = logging.getLogger(__name__)

_local = threading.local()


def _scopes() -> list[Scope]:
    stack = getattr(_local, "scopes", None)
    if stack is None:
        stack = []
        _local.scopes = stack
    return stack


def current_scope() -> Scope | None:
    stack = _scopes()
    return stack[-1] if stack else None


def is_finalizing() -> bool:
    return getattr(_local, "finalizing", False)


class ScopeSlot:
    """Position of one expression in a scope.

    The slot always holds the newest chain of its expression; successors
    take it over from their predecessor.
    """

    __slots__ = ("scope", "chain")

    def __init__(self, scope: Scope, chain: Chain) -> None:
        self.scope = scope
        self.chain = chain


class Scope:
    """Chains created on one thread between entering and leaving a block."""

    def __init__(self) -> None:
        self._slots: list[ScopeSlot] = []
        self.closed = False

    @property
    def chains(self) -> list[Chain]:
        """The newest chain of every expression, in creation order."""
        return [slot.chain for slot in self._slots]

    def register(self, chain: Chain) -> ScopeSlot:
        slot = ScopeSlot(self, chain)
        self._slots.append(slot)
        return slot

    def pending(self) -> list[Chain]:
        return [c for c in self.chains if not c.consumed and not c.reported]

    def close(self, fatal: bool = True) -> None:
        """Finalize every live chain in creation order.

        With ``fatal`` a failing chain raises ChainAssertionError out of this
        call and chains after it are left unevaluated. Without it every chain
        is recorded and nothing is raised.
        """
        self.closed = True
        chains = self.chains
        self._slots = []
        for chain in chains:
            if chain.consumed or chain.reported or not chain.ledger:
                continue
            if not chain.is_final:
                if fatal:
                    logger.warning(
                        f"Chain on '{chain.expr_text}' ends with a dangling "
                        f"{chain.ledger.last.pending_op.value} and was not evaluated"
                    )
                continue
            if fatal:
                finalize(chain)
            else:
                with REPORTER.non_fatal():
                    finalize(chain)

    def discard(self) -> None:
        """Drop every chain without evaluating it."""
        skipped = self.pending()
        if skipped:
            logger.debug(f"Scope discarded, skipping {len(skipped)} chain(s)")
        self.closed = True
        self._slots = []


def finalize(chain: Chain) -> bool | None:
    """Evaluate ``chain`` if it is eligible for automatic reporting.

    Returns the verdict, or None when the chain was not evaluated.
    """
    if not chain.ledger or not chain.is_final or chain.consumed or chain.reported:
        return None
    if is_finalizing():
        logger.debug(f"Already finalizing, skipping nested chain on '{chain.expr_text}'")
        return None

    _local.finalizing = True
    try:
        return chain.evaluate()
    finally:
        _local.finalizing = False


@contextmanager
def scope() -> Iterator[Scope]:
    """Evaluate the chains built inside the block when it exits."""
    opened = Scope()
    stack = _scopes()
    stack.append(opened)
    try:
        yield opened
    except Exception:
        stack.remove(opened)
        logger.debug("Scope left by exception, recording its chains without raising")
        opened.close(fatal=False)
        raise
    except BaseException:
        stack.remove(opened)
        opened.discard()
        raise
    stack.remove(opened)
    opened.close()
