"""Tests for AND/OR evaluation of step ledgers."""

import pytest

from fluentcheck.evaluator import NO_ASSERTIONS, evaluate, render, segments
from fluentcheck.ledger import LogicalOp, Step, StepLedger
from fluentcheck.sentence import MISSING_OP, Sentence


def _step(obj: str, passed: bool, op: LogicalOp | None = None) -> Step:
    return Step(Sentence("be", obj), passed, op)


AND = LogicalOp.AND
OR = LogicalOp.OR


def test_empty_ledger_passes():
    assert evaluate([]) == (True, NO_ASSERTIONS)


def test_single_step():
    assert evaluate([_step("even", False)], "value") == (False, "value is even")


def test_and_chain_message():
    steps = [
        _step("greater than 30", True, AND),
        _step("less than 50", True, AND),
        _step("even", True),
    ]
    passed, message = evaluate(steps, "value")
    assert passed is True
    assert message == "value is greater than 30 AND is less than 50 AND is even"


@pytest.mark.parametrize(
    "first,op,second,expected",
    [
        (True, AND, False, False),
        (True, AND, True, True),
        (False, OR, True, True),
        (False, OR, False, False),
    ],
)
def test_two_steps(first, op, second, expected):
    passed, _ = evaluate([_step("a", first, op), _step("b", second)])
    assert passed is expected


def test_and_binds_tighter_than_or():
    # (F and T) or T
    assert evaluate([_step("a", False, AND), _step("b", True, OR), _step("c", True)])[0]
    # T or (F and F)
    assert evaluate([_step("a", True, OR), _step("b", False, AND), _step("c", False)])[0]
    # F or (T and F)
    assert not evaluate([_step("a", False, OR), _step("b", True, AND), _step("c", False)])[0]


def test_four_steps_two_segments():
    steps = [
        _step("a", True, AND),
        _step("b", False, OR),
        _step("c", True, AND),
        _step("d", True),
    ]
    passed, message = evaluate(steps, "x")
    assert passed is True
    assert message == "x is a AND is b OR is c AND is d"


def test_segments_split_after_or():
    steps = [_step("a", True, AND), _step("b", True, OR), _step("c", True)]
    assert segments(steps) == [[0, 1], [2]]
    assert segments([]) == []


def test_missing_operator_defaults_to_and_and_is_rendered():
    steps = [_step("a", True), _step("b", False)]
    passed, message = evaluate(steps, "x")
    assert passed is False
    assert message == f"x is a {MISSING_OP} is b"


def test_render_without_subject():
    assert render([_step("even", True)]) == "is even"


def test_render_plural_subject():
    steps = [_step("sorted", True, AND), _step("unique", True)]
    assert render(steps, "items") == "items are sorted AND are unique"


def test_ledger_is_persistent():
    empty = StepLedger()
    one = empty.append(_step("a", True))
    joined = one.with_last_op(OR)
    assert len(empty) == 0
    assert one.last.pending_op is None
    assert joined.last.pending_op is OR
    assert empty.with_last_op(AND) is empty
    assert not empty
    assert [s.sentence.object for s in joined] == ["a"]
