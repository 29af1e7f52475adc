"""Sentence structure for assertion steps and its English rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace

MISSING_OP = "[MISSING OP]"

_PLURAL_NOUNS = frozenset(
    {
        "people",
        "children",
        "men",
        "women",
        "feet",
        "teeth",
        "mice",
        "geese",
        "data",
        "criteria",
        "phenomena",
        "indices",
        "matrices",
        "vertices",
        "alumni",
    }
)

# Nouns ending in "s" that are still singular.
_SINGULAR_SUFFIXES = ("ss", "us", "is")

_IRREGULAR = {
    "be": ("is", "are"),
    "have": ("has", "have"),
    "contain": ("contains", "contain"),
}

_CALL_OR_INDEX = re.compile(r"(\.\w+\(.*\)|\[[^\]]*\]|\(\))$")


@dataclass(frozen=True)
class Sentence:
    """One assertion phrase, e.g. ``value`` / ``be`` / ``greater than 42``.

    Attributes:
        verb: Infinitive verb ("be", "have", "contain", "match").
        object: Rendered argument ("greater than 42", "length 5").
        qualifiers: Extra trailing words ("within 0.01", "ignoring case").
        negated: Whether the phrase reads "not ...".
        subject: Source-expression text of the tested value. Injected by the
            chain when the step is appended.
    """

    verb: str
    object: str = ""
    qualifiers: tuple[str, ...] = field(default_factory=tuple)
    negated: bool = False
    subject: str = ""

    def with_negation(self, negated: bool) -> Sentence:
        return replace(self, negated=negated)

    def with_qualifier(self, qualifier: str) -> Sentence:
        return replace(self, qualifiers=self.qualifiers + (qualifier,))

    def with_subject(self, subject: str) -> Sentence:
        return replace(self, subject=subject)

    def format(self) -> str:
        """Render the phrase with the verb in its infinitive form."""
        verb = f"not {self.verb}" if self.negated else self.verb
        return _join(verb, self.object, *self.qualifiers)

    def __str__(self) -> str:
        return self.format()


def _join(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def subject_noun(subject: str) -> str:
    """Reduce an expression like ``&self.items.copy()`` to its noun ``items``."""
    noun = subject.strip().lstrip("&*")
    previous = None
    while previous != noun:
        previous = noun
        noun = _CALL_OR_INDEX.sub("", noun)
    return noun.rsplit(".", 1)[-1]


def is_plural(subject: str) -> bool:
    noun = subject_noun(subject).lower()
    if not noun.isidentifier():
        return False
    if noun in _PLURAL_NOUNS:
        return True
    if noun.endswith(_SINGULAR_SUFFIXES):
        return False
    return noun.endswith("s")


def _third_person(verb: str) -> str:
    if verb.endswith(("s", "sh", "ch", "x", "z", "o")):
        return f"{verb}es"
    if len(verb) > 1 and verb.endswith("y") and verb[-2] not in "aeiou":
        return f"{verb[:-1]}ies"
    return f"{verb}s"


def conjugate_verb(verb: str, plural: bool, negated: bool = False) -> str:
    """Conjugate the first word of ``verb`` ("start with" -> "starts with")."""
    head, _, rest = verb.partition(" ")
    if head == "be":
        form = "are" if plural else "is"
        return _join(f"{form} not" if negated else form, rest)
    if negated:
        return f"{'do' if plural else 'does'} not {verb}"
    if head in _IRREGULAR:
        singular, plural_form = _IRREGULAR[head]
        return _join(plural_form if plural else singular, rest)
    return _join(head if plural else _third_person(head), rest)


def conjugate(sentence: Sentence, subject: str | None = None) -> str:
    """Render the phrase with the verb agreeing with its subject.

    The subject text itself is not included; ``subject`` overrides the one
    stored on the sentence when deciding plurality.
    """
    plural = is_plural(sentence.subject if subject is None else subject)
    verb = conjugate_verb(sentence.verb, plural, sentence.negated)
    return _join(verb, sentence.object, *sentence.qualifiers)
