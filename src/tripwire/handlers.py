"""Default handlers.

Every handler is called as ``handler(status, message, test_name, *args)``
where ``args`` are the arguments the caller passed, before any input
transformation. The value a handler returns is what the caller gets back.
"""

from __future__ import annotations

import logging
from typing import Any

from tripwire.base import Handler, HandlerName
from tripwire.errors import AssertionFailure

logger = logging.getLogger(__name__)


def _first(args: tuple[Any, ...]) -> Any:
    return args[0] if args else None


def test(status: Any, message: str, test_name: str, *args: Any) -> Any:
    return status


def log(status: Any, message: str, test_name: str, *args: Any) -> Any:
    logger.warning(message)
    return _first(args)


def should(status: Any, message: str, test_name: str, *args: Any) -> Any:
    if not status:
        logger.warning(message)
    return _first(args)


def should_not(status: Any, message: str, test_name: str, *args: Any) -> Any:
    if status:
        logger.warning(message)
    return _first(args)


def must(status: Any, message: str, test_name: str, *args: Any) -> Any:
    if not status:
        raise AssertionFailure(message, name=test_name)
    return _first(args)


def must_not(status: Any, message: str, test_name: str, *args: Any) -> Any:
    if status:
        raise AssertionFailure(message, name=test_name)
    return _first(args)


# not a pytest test function
test.__test__ = False  # type: ignore[attr-defined]

DEFAULT_HANDLERS: dict[HandlerName, Handler] = {
    HandlerName.TEST: test,
    HandlerName.LOG: log,
    HandlerName.SHOULD: should,
    HandlerName.SHOULD_NOT: should_not,
    HandlerName.MUST: must,
    HandlerName.MUST_NOT: must_not,
}
