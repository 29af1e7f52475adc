from __future__ import annotations

from abc import ABC, abstractmethod

from fluentcheck.result import ChainResult, Session


class Renderer(ABC):
    """Destination for reported chains and session summaries."""

    @abstractmethod
    def print_success(self, result: ChainResult) -> None:
        ...

    @abstractmethod
    def print_failure(self, result: ChainResult) -> None:
        ...

    @abstractmethod
    def print_session_summary(self, session: Session) -> None:
        ...


class CompositeRenderer(Renderer):
    """Forward every call to each wrapped renderer in order."""

    def __init__(self, *renderers: Renderer) -> None:
        self.renderers = list(renderers)

    def print_success(self, result: ChainResult) -> None:
        for renderer in self.renderers:
            renderer.print_success(result)

    def print_failure(self, result: ChainResult) -> None:
        for renderer in self.renderers:
            renderer.print_failure(result)

    def print_session_summary(self, session: Session) -> None:
        for renderer in self.renderers:
            renderer.print_session_summary(session)
