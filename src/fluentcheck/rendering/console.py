"""Terminal output for reported chains."""

from __future__ import annotations

from typing import Callable

import typer

from fluentcheck.config import Config
from fluentcheck.rendering.base import Renderer
from fluentcheck.result import ChainResult, Session
from fluentcheck.sentence import conjugate


class ConsoleRenderer(Renderer):
    def __init__(
        self,
        config: Config,
        echo: Callable[..., None] = typer.echo,
    ) -> None:
        self.config = config
        self._echo = echo

    def _mark(self, passed: bool) -> str:
        if self.config.use_unicode_symbols:
            symbol = "✓" if passed else "✗"
        else:
            symbol = "PASS" if passed else "FAIL"
        return self._color(symbol, passed)

    def _color(self, text: str, passed: bool, bold: bool = False) -> str:
        if not self.config.use_colors:
            return text
        fg = typer.colors.GREEN if passed else typer.colors.RED
        return typer.style(text, fg=fg, bold=bold)

    def step_lines(self, result: ChainResult) -> list[str]:
        lines = []
        for step in result.steps:
            phrase = conjugate(step.sentence, result.expr_text)
            lines.append(f"    {self._mark(step.passed)} {phrase}")
        return lines

    def print_success(self, result: ChainResult) -> None:
        if not self.config.show_success_details:
            return
        self._echo(f"{self._mark(True)} {result.message}")

    def print_failure(self, result: ChainResult) -> None:
        self._echo(f"{self._mark(False)} {self._color(result.message, False, bold=True)}")
        if len(result.steps) > 1:
            for line in self.step_lines(result):
                self._echo(line)

    def print_session_summary(self, session: Session) -> None:
        passed = self._color(f"{session.passed_count} passed", True)
        failed = self._color(f"{session.failed_count} failed", session.failed_count == 0)
        self._echo("")
        self._echo(f"Test Summary: {passed}, {failed}")
        if not session.failures:
            return
        self._echo("")
        self._echo("Failures:")
        for index, failure in enumerate(session.failures, start=1):
            self._echo(f"  {index}) {failure.message}")
            for line in self.step_lines(failure):
                self._echo(line)
