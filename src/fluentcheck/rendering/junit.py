from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from fluentcheck.rendering.base import Renderer
from fluentcheck.result import ChainResult, Session

SUITE_NAME = "fluentcheck"


@dataclass
class JUnitSummary:
    tests: int
    failures: int
    failure_messages: list[tuple[str, str]] = field(default_factory=list)


def _test_case(result: ChainResult) -> TestCase:
    case = TestCase(result.message)
    case.classname = result.expr_text
    if not result.passed:
        case.result = Failure(result.primary_sentence)
    return case


def write_junit(path: Path, results: Iterable[ChainResult], session: Session | None = None) -> Path:
    """Write junit.xml with one test case per reported chain, return path.

    The suite's tests/failures attributes count ``results``, whatever thread
    produced them. ``session`` totals are added as ``thread_*`` properties.
    """
    xml = JUnitXml()
    suite = TestSuite(SUITE_NAME)
    if session is not None:
        # a Session only covers the thread that summarized it
        suite.add_property("thread_passed_count", str(session.passed_count))
        suite.add_property("thread_failed_count", str(session.failed_count))
    for result in results:
        suite.add_testcase(_test_case(result))
    # Use append (not +=) to preserve properties
    xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path


def read_junit_summary(path: Path) -> JUnitSummary:
    """Parse a junit.xml back into totals and (test name, message) failures."""
    xml = JUnitXml.fromfile(str(path))
    if isinstance(xml, TestSuite):
        suites = [xml]
    else:
        suites = list(xml)

    summary = JUnitSummary(tests=0, failures=0)
    for suite in suites:
        summary.tests += suite.tests
        summary.failures += suite.failures
        for case in suite:
            if case.result and isinstance(case.result[0], Failure):
                summary.failure_messages.append((case.name, case.result[0].message or ""))
    return summary


class JUnitRenderer(Renderer):
    """Collect reported chains from any thread and write them as junit.xml.

    Deduplicated or silenced chains never reach a renderer, so the file holds
    what was rendered on every thread. The counters of the summarizing
    thread's session are kept as ``thread_*`` suite properties.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._results: list[ChainResult] = []

    @property
    def results(self) -> list[ChainResult]:
        with self._lock:
            return list(self._results)

    def print_success(self, result: ChainResult) -> None:
        with self._lock:
            self._results.append(result)

    def print_failure(self, result: ChainResult) -> None:
        with self._lock:
            self._results.append(result)

    def print_session_summary(self, session: Session) -> None:
        write_junit(self.path, self.results, session)
