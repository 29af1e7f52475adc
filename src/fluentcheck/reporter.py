"""Per-thread collection of chain outcomes.

Every reported chain is counted. Rendering goes through the renderer held by
the config store unless silent mode is on, or deduplication is on and an
identical result was already rendered on this thread since the last summary.
Failures are raised as ChainAssertionError unless a ``non_fatal()`` block is
active.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from fluentcheck import events
from fluentcheck.config import STORE, Config, ConfigStore
from fluentcheck.events import EventKind
from fluentcheck.rendering.base import Renderer
from fluentcheck.rendering.console import ConsoleRenderer
from fluentcheck.result import ChainAssertionError, ChainResult, Session

logger = logging.getLogger(__name__)


@dataclass
class _ThreadState:
    session: Session = field(default_factory=Session)
    reported: set[ChainResult] = field(default_factory=set)
    deduplicate: bool = True
    silent: bool = False
    non_fatal_depth: int = 0


class Reporter:
    """Receives ``(passed, result)`` for every evaluated chain."""

    def __init__(self, store: ConfigStore) -> None:
        self.store = store
        self._local = threading.local()

    def _state(self) -> _ThreadState:
        state = getattr(self._local, "state", None)
        if state is None:
            state = _ThreadState()
            self._local.state = state
        return state

    def _renderer(self) -> tuple[Config, Renderer]:
        cfg, renderer = self.store.snapshot()
        return cfg, renderer if renderer is not None else ConsoleRenderer(cfg)

    def session(self) -> Session:
        return self._state().session

    def on_result(self, passed: bool, result: ChainResult) -> None:
        state = self._state()
        if passed:
            state.session.passed_count += 1
            events.emit(EventKind.SUCCESS, result)
        else:
            state.session.failed_count += 1
            state.session.failures.append(result)
            events.emit(EventKind.FAILURE, result)

        cfg, renderer = self._renderer()
        if state.silent:
            logger.debug(f"Silent mode, not rendering: {result.message}")
        elif self._first_sighting(state, result):
            if passed:
                renderer.print_success(result)
            else:
                renderer.print_failure(result)
        else:
            logger.debug(f"Duplicate result suppressed: {result.message}")

        if not passed and state.non_fatal_depth == 0:
            raise ChainAssertionError(self.failure_message(result, cfg), result)

    def _first_sighting(self, state: _ThreadState, result: ChainResult) -> bool:
        if not state.deduplicate:
            return True
        if result in state.reported:
            return False
        state.reported.add(result)
        return True

    @staticmethod
    def failure_message(result: ChainResult, cfg: Config) -> str:
        if cfg.enhanced_output_enabled:
            return result.message
        return result.primary_sentence

    def summarize(self, renderer: Renderer | None = None) -> Session:
        """Render the session summary, then start a fresh session.

        ``renderer`` overrides the configured one for this summary only.
        Returns the session that was just summarized.
        """
        state = self._state()
        finished = state.session
        if renderer is None:
            _, renderer = self._renderer()
        renderer.print_session_summary(finished)
        logger.debug(
            f"Session completed: {finished.passed_count} passed, {finished.failed_count} failed"
        )

        events.emit(EventKind.SESSION_COMPLETED)

        self.reset_message_cache()
        self.enable_deduplication()
        state.session = Session()
        return finished

    def reset_message_cache(self) -> None:
        self._state().reported.clear()

    def enable_deduplication(self) -> None:
        self._state().deduplicate = True

    def disable_deduplication(self) -> None:
        self._state().deduplicate = False

    def enable_silent_mode(self) -> None:
        self._state().silent = True

    def disable_silent_mode(self) -> None:
        self._state().silent = False

    @contextmanager
    def silent(self) -> Iterator[None]:
        state = self._state()
        previous = state.silent
        state.silent = True
        try:
            yield
        finally:
            state.silent = previous

    @contextmanager
    def non_fatal(self) -> Iterator[None]:
        """Record failures inside the block without raising them."""
        state = self._state()
        state.non_fatal_depth += 1
        try:
            yield
        finally:
            state.non_fatal_depth -= 1

    def reset(self) -> None:
        """Drop all state of the current thread."""
        self._local.state = None


REPORTER = Reporter(STORE)
