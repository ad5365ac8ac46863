"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from tripwire import CheckResult, Registry


def _exists(path):
    if Path(path).exists():
        return True, f"{path} exists"
    return False, f"{path} missing"


def _is_positive(n):
    return CheckResult(n > 0, f"{n} is positive" if n > 0 else f"{n} is not positive")


SAMPLE_TESTS = {"exists": _exists, "positive": _is_positive}


@pytest.fixture
def registry():
    return Registry(SAMPLE_TESTS)


@pytest.fixture
def missing_path(tmp_path):
    return str(tmp_path / "nope")


@pytest.fixture
def recorder():
    """Factory for callables that record every call and return a fixed value."""

    def _make(returns=None):
        calls = []

        def _record(*args):
            calls.append(args)
            return returns(*args) if callable(returns) else returns

        _record.calls = calls
        return _record

    return _make
