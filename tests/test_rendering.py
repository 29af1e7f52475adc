"""Tests for console and junit renderers."""

import threading

from junitparser import JUnitXml

from fluentcheck.config import Config
from fluentcheck.ledger import LogicalOp, Step
from fluentcheck.rendering import (
    CompositeRenderer,
    ConsoleRenderer,
    JUnitRenderer,
    read_junit_summary,
    write_junit,
)
from fluentcheck.result import ChainResult, Session
from fluentcheck.sentence import Sentence

PLAIN = Config(use_colors=False, use_unicode_symbols=False)


def _passing() -> ChainResult:
    step = Step(Sentence("be", "even", subject="value"), True)
    return ChainResult("value", (step,), True, "value is even")


def _failing() -> ChainResult:
    steps = (
        Step(Sentence("be", "greater than 10", subject="value"), False, LogicalOp.AND),
        Step(Sentence("be", "even", subject="value"), True),
    )
    return ChainResult("value", steps, False, "value is greater than 10 AND is even")


def _console(config: Config = PLAIN):
    lines = []
    return ConsoleRenderer(config, echo=lines.append), lines


def test_console_success():
    renderer, lines = _console()
    renderer.print_success(_passing())
    assert lines == ["PASS value is even"]


def test_console_success_hidden():
    renderer, lines = _console(PLAIN.model_copy(update={"show_success_details": False}))
    renderer.print_success(_passing())
    assert lines == []


def test_console_failure_lists_steps():
    renderer, lines = _console()
    renderer.print_failure(_failing())
    assert lines == [
        "FAIL value is greater than 10 AND is even",
        "    FAIL is greater than 10",
        "    PASS is even",
    ]


def test_console_unicode_symbols():
    renderer, lines = _console(Config(use_colors=False))
    renderer.print_success(_passing())
    assert lines == ["✓ value is even"]


def test_console_colors():
    renderer, lines = _console(Config())
    renderer.print_failure(_failing())
    assert "\x1b[" in lines[0]
    assert "value is greater than 10 AND is even" in lines[0]


def test_console_summary():
    renderer, lines = _console()
    session = Session(passed_count=2, failed_count=1, failures=[_failing()])
    renderer.print_session_summary(session)
    assert lines == [
        "",
        "Test Summary: 2 passed, 1 failed",
        "",
        "Failures:",
        "  1) value is greater than 10 AND is even",
        "    FAIL is greater than 10",
        "    PASS is even",
    ]


def test_console_summary_without_failures():
    renderer, lines = _console()
    renderer.print_session_summary(Session(passed_count=3))
    assert lines == ["", "Test Summary: 3 passed, 0 failed"]


def test_composite_forwards_in_order(mocker):
    first, second = mocker.Mock(), mocker.Mock()
    composite = CompositeRenderer(first, second)
    composite.print_failure(_failing())
    composite.print_session_summary(Session())
    first.print_failure.assert_called_once_with(_failing())
    second.print_failure.assert_called_once_with(_failing())
    second.print_session_summary.assert_called_once_with(Session())


def test_write_and_read_junit(tmp_path):
    path = write_junit(
        tmp_path / "reports" / "fluentcheck.xml",
        [_passing(), _failing()],
        Session(passed_count=1, failed_count=1),
    )
    assert path.exists()
    summary = read_junit_summary(path)
    assert summary.tests == 2
    assert summary.failures == 1
    assert summary.failure_messages == [
        ("value is greater than 10 AND is even", "be greater than 10")
    ]


def test_junit_renderer_writes_on_summary(tmp_path):
    path = tmp_path / "out.xml"
    renderer = JUnitRenderer(path)
    renderer.print_success(_passing())
    renderer.print_failure(_failing())
    assert not path.exists()

    renderer.print_session_summary(Session(passed_count=1, failed_count=1))

    assert renderer.results == [_passing(), _failing()]
    assert read_junit_summary(path).tests == 2
    suite = next(iter(JUnitXml.fromfile(str(path))))
    properties = {p.name: p.value for p in suite.properties()}
    assert properties == {"thread_passed_count": "1", "thread_failed_count": "1"}


def test_junit_renderer_collects_from_every_thread(tmp_path):
    renderer = JUnitRenderer(tmp_path / "out.xml")
    worker = threading.Thread(target=renderer.print_failure, args=(_failing(),))
    worker.start()
    worker.join()
    renderer.print_success(_passing())

    renderer.print_session_summary(Session(passed_count=1))

    summary = read_junit_summary(renderer.path)
    assert summary.tests == 2
    assert summary.failures == 1
