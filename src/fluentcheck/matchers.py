"""Predicates available on every chain.

Each matcher computes a plain boolean and a Sentence, then hands both to
``Chain.add_step``; negation, chaining and reporting happen there.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, TYPE_CHECKING

from fluentcheck.sentence import Sentence

if TYPE_CHECKING:
    from fluentcheck.chain import Chain


def _show(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    return repr(value)


class Matchers(ABC):
    value: Any

    @abstractmethod
    def add_step(self, sentence: Sentence, passed: bool, *, negatable: bool = True) -> Chain:
        ...

    # -- equality / identity

    def to_equal(self, expected: Any) -> Chain:
        return self.add_step(Sentence("be", f"equal to {_show(expected)}"), self.value == expected)

    def to_be_true(self) -> Chain:
        return self.add_step(Sentence("be", "true"), self.value is True)

    def to_be_false(self) -> Chain:
        return self.add_step(Sentence("be", "false"), self.value is False)

    def to_be_none(self) -> Chain:
        return self.add_step(Sentence("be", "None"), self.value is None)

    def to_be_instance_of(self, cls: type) -> Chain:
        return self.add_step(
            Sentence("be", f"an instance of {cls.__name__}"), isinstance(self.value, cls)
        )

    # -- numeric

    def to_be_positive(self) -> Chain:
        return self.add_step(Sentence("be", "positive"), self.value > 0)

    def to_be_negative(self) -> Chain:
        return self.add_step(Sentence("be", "negative"), self.value < 0)

    def to_be_zero(self) -> Chain:
        return self.add_step(Sentence("be", "zero"), self.value == 0)

    def to_be_greater_than(self, expected: Any) -> Chain:
        return self.add_step(Sentence("be", f"greater than {expected}"), self.value > expected)

    def to_be_greater_than_or_equal(self, expected: Any) -> Chain:
        return self.add_step(
            Sentence("be", f"greater than or equal to {expected}"), self.value >= expected
        )

    def to_be_less_than(self, expected: Any) -> Chain:
        return self.add_step(Sentence("be", f"less than {expected}"), self.value < expected)

    def to_be_less_than_or_equal(self, expected: Any) -> Chain:
        return self.add_step(
            Sentence("be", f"less than or equal to {expected}"), self.value <= expected
        )

    def to_be_in_range(self, start: Any, end: Any) -> Chain:
        """Half-open range check: ``start <= value < end``."""
        return self.add_step(
            Sentence("be", f"in range {start}..{end}"), start <= self.value < end
        )

    def to_be_even(self) -> Chain:
        return self.add_step(Sentence("be", "even"), self.value % 2 == 0)

    def to_be_odd(self) -> Chain:
        return self.add_step(Sentence("be", "odd"), self.value % 2 != 0)

    def to_be_divisible_by(self, divisor: Any) -> Chain:
        passed = divisor != 0 and self.value % divisor == 0
        return self.add_step(Sentence("be", f"divisible by {divisor}"), passed)

    def to_be_close_to(self, expected: float, tolerance: float = 1e-9) -> Chain:
        sentence = Sentence("be", f"close to {expected}").with_qualifier(f"within {tolerance}")
        return self.add_step(sentence, math.isclose(self.value, expected, abs_tol=tolerance))

    # -- collections and strings

    def to_be_empty(self) -> Chain:
        return self.add_step(Sentence("be", "empty"), len(self.value) == 0)

    def to_have_length(self, expected: int) -> Chain:
        return self.add_step(Sentence("have", f"length {expected}"), len(self.value) == expected)

    def to_contain(self, item: Any) -> Chain:
        return self.add_step(Sentence("contain", _show(item)), item in self.value)

    def to_contain_all(self, items: Iterable[Any]) -> Chain:
        wanted = list(items)
        passed = all(item in self.value for item in wanted)
        return self.add_step(Sentence("contain", f"all of {wanted!r}"), passed)

    def to_contain_key(self, key: Any) -> Chain:
        return self.add_step(Sentence("contain", f"key {_show(key)}"), key in self.value)

    def to_contain_entry(self, key: Any, value: Any) -> Chain:
        passed = key in self.value and self.value[key] == value
        return self.add_step(
            Sentence("contain", f"entry ({_show(key)}, {_show(value)})"), passed
        )

    def to_start_with(self, prefix: str) -> Chain:
        return self.add_step(Sentence("start with", _show(prefix)), self.value.startswith(prefix))

    def to_end_with(self, suffix: str) -> Chain:
        return self.add_step(Sentence("end with", _show(suffix)), self.value.endswith(suffix))

    def to_match(self, pattern: str) -> Chain:
        """Regex search. An invalid pattern is recorded as a failing step."""
        sentence = Sentence("match", f"pattern {_show(pattern)}")
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            return self.add_step(
                sentence.with_qualifier(f"(invalid pattern: {e})"), False, negatable=False
            )
        return self.add_step(sentence, compiled.search(self.value) is not None)
