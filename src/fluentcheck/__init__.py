"""Fluent assertions with chained AND/OR/NOT evaluation.

    from fluentcheck import expect, scope

    with scope():
        expect(42, "value").to_be_greater_than(30).and_().to_be_even()
"""

from fluentcheck.chain import Chain, expect, expect_not
from fluentcheck.config import Config, config, load_config
from fluentcheck.evaluator import evaluate
from fluentcheck.events import on_failure, on_session_completed, on_success
from fluentcheck.finalization import scope
from fluentcheck.ledger import LogicalOp, Step, StepLedger
from fluentcheck.reporter import REPORTER, Reporter
from fluentcheck.result import ChainAssertionError, ChainResult, Session
from fluentcheck.sentence import Sentence

non_fatal = REPORTER.non_fatal
silent = REPORTER.silent
summarize = REPORTER.summarize

__all__ = [
    "Chain",
    "ChainAssertionError",
    "ChainResult",
    "Config",
    "LogicalOp",
    "REPORTER",
    "Reporter",
    "Sentence",
    "Session",
    "Step",
    "StepLedger",
    "config",
    "evaluate",
    "expect",
    "expect_not",
    "load_config",
    "non_fatal",
    "on_failure",
    "on_session_completed",
    "on_success",
    "scope",
    "silent",
    "summarize",
]
