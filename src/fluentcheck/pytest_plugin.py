"""pytest integration: every test body runs inside its own ``scope()``.

Chains left unevaluated when a test returns are evaluated then, and a failing
chain fails the test. Results rendered during a test go to the captured
output of that test; the session summary is added to the terminal report.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fluentcheck.config import STORE, load_config
from fluentcheck.finalization import scope
from fluentcheck.rendering.base import CompositeRenderer, Renderer
from fluentcheck.rendering.console import ConsoleRenderer
from fluentcheck.rendering.junit import JUnitRenderer
from fluentcheck.reporter import REPORTER
from fluentcheck.verbose import setup_logger

_previous_key = pytest.StashKey[tuple]()
_junit_key = pytest.StashKey[JUnitRenderer]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("fluentcheck")
    group.addoption(
        "--fluentcheck-config",
        default=None,
        help="YAML file with fluentcheck output options",
    )
    group.addoption(
        "--fluentcheck-junit",
        default=None,
        help="Write reported chains to this junit.xml",
    )
    group.addoption(
        "--fluentcheck-debug-log",
        default=None,
        help="Write fluentcheck debug logging to this file",
    )
    group.addoption(
        "--fluentcheck-no-summary",
        action="store_true",
        default=False,
        help="Do not print the fluentcheck session summary",
    )


def pytest_configure(config: pytest.Config) -> None:
    # Restored in pytest_unconfigure so nested runs (pytester) do not leak
    config.stash[_previous_key] = STORE.snapshot()

    config_file = config.getoption("fluentcheck_config")
    if config_file:
        STORE.set(load_config(Path(config_file)))
    settings = STORE.get()

    junit = config.getoption("fluentcheck_junit") or settings.junit_path
    if junit:
        junit_renderer = JUnitRenderer(Path(junit))
        config.stash[_junit_key] = junit_renderer
        STORE.set_renderer(CompositeRenderer(ConsoleRenderer(settings), junit_renderer))

    debug_log = config.getoption("fluentcheck_debug_log")
    if debug_log:
        setup_logger(Path(debug_log), verbose=False, logger_name="fluentcheck")


def pytest_unconfigure(config: pytest.Config) -> None:
    previous = config.stash.get(_previous_key, None)
    if previous is None:
        return
    settings, renderer = previous
    STORE.set(settings)
    STORE.set_renderer(renderer)


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item):
    with scope():
        return (yield)


def pytest_terminal_summary(terminalreporter, config: pytest.Config) -> None:
    if config.getoption("fluentcheck_no_summary"):
        return
    junit_renderer = config.stash.get(_junit_key, None)
    if REPORTER.session().total == 0 and junit_renderer is None:
        return

    terminalreporter.section("fluentcheck")
    renderer: Renderer = ConsoleRenderer(STORE.get(), echo=terminalreporter.write_line)
    if junit_renderer is not None:
        renderer = CompositeRenderer(renderer, junit_renderer)
    REPORTER.summarize(renderer=renderer)
    if junit_renderer is not None:
        terminalreporter.write_line(f"fluentcheck junit: {junit_renderer.path}")
