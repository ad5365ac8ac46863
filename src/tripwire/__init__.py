"""Run-time precondition and postcondition checks built from named tests."""

from tripwire.base import CheckResult, HandlerName
from tripwire.config import RegistryConfig, load_config
from tripwire.errors import (
    AssertionFailure,
    ConfigurationError,
    MalformedTestResult,
    TripwireError,
    UnknownHandler,
    UnknownTest,
)
from tripwire.registry import Registry

__all__ = [
    "AssertionFailure",
    "CheckResult",
    "ConfigurationError",
    "HandlerName",
    "MalformedTestResult",
    "Registry",
    "RegistryConfig",
    "TripwireError",
    "UnknownHandler",
    "UnknownTest",
    "load_config",
]
