"""Tests for sentence formatting and verb conjugation."""

import pytest

from fluentcheck.sentence import (
    Sentence,
    conjugate,
    conjugate_verb,
    is_plural,
    subject_noun,
)


def test_format_uses_infinitive():
    assert Sentence("be", "greater than 42").format() == "be greater than 42"


def test_format_negated():
    sentence = Sentence("be", "greater than 42").with_negation(True)
    assert sentence.format() == "not be greater than 42"
    assert str(sentence) == "not be greater than 42"


def test_format_appends_qualifiers():
    sentence = Sentence("be", "close to 1.0").with_qualifier("within 0.01")
    assert sentence.format() == "be close to 1.0 within 0.01"


def test_sentence_is_immutable():
    original = Sentence("be", "even")
    negated = original.with_negation(True)
    assert original.negated is False
    assert negated.negated is True
    assert original.with_subject("value").subject == "value"
    assert original.subject == ""


@pytest.mark.parametrize(
    "verb,plural,negated,expected",
    [
        ("be", False, False, "is"),
        ("be", True, False, "are"),
        ("be", False, True, "is not"),
        ("be", True, True, "are not"),
        ("have", False, False, "has"),
        ("have", True, False, "have"),
        ("have", False, True, "does not have"),
        ("contain", False, False, "contains"),
        ("contain", True, True, "do not contain"),
        ("match", False, False, "matches"),
        ("start with", False, False, "starts with"),
        ("end with", True, False, "end with"),
        ("carry", False, False, "carries"),
    ],
)
def test_conjugate_verb(verb, plural, negated, expected):
    assert conjugate_verb(verb, plural, negated) == expected


def test_subject_noun_strips_calls_and_references():
    assert subject_noun("&self.items.copy()") == "items"
    assert subject_noun("response.headers") == "headers"
    assert subject_noun("value") == "value"


@pytest.mark.parametrize(
    "subject,expected",
    [
        ("items", True),
        ("user.roles", True),
        ("data", True),
        ("children", True),
        ("value", False),
        ("status", False),
        ("address", False),
        ("[1, 2, 3]", False),
        ("", False),
    ],
)
def test_is_plural(subject, expected):
    assert is_plural(subject) is expected


def test_conjugate_agrees_with_subject():
    sentence = Sentence("have", "length 3", subject="items")
    assert conjugate(sentence) == "have length 3"
    assert conjugate(sentence, "value") == "has length 3"


def test_conjugate_negated_non_be_verb():
    sentence = Sentence("contain", '"x"', negated=True, subject="name")
    assert conjugate(sentence) == 'does not contain "x"'
