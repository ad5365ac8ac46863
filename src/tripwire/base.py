"""Base data structures for the registry."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, NamedTuple


class CheckResult(NamedTuple):
    """Outcome of a single test.

    Attributes:
        status: Whether the condition held. Any truthy/falsy value is accepted
            by the handlers; stock checks always use a real bool.
        message: Human-readable detail, reported by the handlers.
    """

    status: Any
    message: str


class HandlerName(str, Enum):
    TEST = "test"
    LOG = "log"
    SHOULD = "should"
    SHOULD_NOT = "should_not"
    MUST = "must"
    MUST_NOT = "must_not"


Test = Callable[..., Any]
Handler = Callable[..., Any]
InputTransformer = Callable[..., Any]
