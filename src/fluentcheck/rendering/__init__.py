"""Renderers that receive reported chains and session summaries."""

from fluentcheck.rendering.base import CompositeRenderer, Renderer
from fluentcheck.rendering.console import ConsoleRenderer
from fluentcheck.rendering.junit import JUnitRenderer, read_junit_summary, write_junit

__all__ = [
    "CompositeRenderer",
    "ConsoleRenderer",
    "JUnitRenderer",
    "Renderer",
    "read_junit_summary",
    "write_junit",
]
