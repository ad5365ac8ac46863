"""Exceptions raised by the registry and its handlers."""

from __future__ import annotations

from typing import Any


class TripwireError(Exception):
    """Base class for every error raised by tripwire."""


class ConfigurationError(TripwireError, ValueError):
    """A registry could not be built from the given configuration."""


class UnknownTest(TripwireError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown test '{name}'")


class UnknownHandler(TripwireError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown handler '{name}'")


class MalformedTestResult(TripwireError, TypeError):
    """A test returned something other than a ``(status, message)`` pair."""

    def __init__(self, name: str, result: Any):
        self.name = name
        self.result = result
        super().__init__(
            f"Test '{name}' must return a (status, message) pair, got {result!r}"
        )


class AssertionFailure(TripwireError, AssertionError):
    """Raised by the ``must`` and ``must_not`` handlers.

    ``str()`` of the exception is the test's message, unchanged.
    """

    def __init__(self, message: str, name: str | None = None):
        self.message = message
        self.name = name
        super().__init__(message)
