"""Per-thread hooks fired when chains are reported and sessions complete."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Callable

from fluentcheck.result import ChainResult

ResultHandler = Callable[[ChainResult], None]
SessionHandler = Callable[[], None]


class EventKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    SESSION_COMPLETED = "session_completed"


_local = threading.local()


def _handlers(kind: EventKind) -> list:
    registry = getattr(_local, "handlers", None)
    if registry is None:
        registry = {k: [] for k in EventKind}
        _local.handlers = registry
    return registry[kind]


def on_success(handler: ResultHandler) -> ResultHandler:
    _handlers(EventKind.SUCCESS).append(handler)
    return handler


def on_failure(handler: ResultHandler) -> ResultHandler:
    _handlers(EventKind.FAILURE).append(handler)
    return handler


def on_session_completed(handler: SessionHandler) -> SessionHandler:
    _handlers(EventKind.SESSION_COMPLETED).append(handler)
    return handler


def emit(kind: EventKind, result: ChainResult | None = None) -> None:
    """Call every handler registered on this thread for ``kind``."""
    for handler in list(_handlers(kind)):
        if kind is EventKind.SESSION_COMPLETED:
            handler()
        else:
            handler(result)


def clear_handlers() -> None:
    _local.handlers = None
