from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import BaseModel, ConfigDict, ImportString, ValidationError, field_validator

from tripwire.base import HandlerName
from tripwire.errors import ConfigurationError

logger = logging.getLogger(__name__)

RESERVED_OPTIONS = ("tests", "handlers", "input_transformer")

# Callables may also be given as dotted import paths, e.g. "tripwire.checks.path_exists"
CallableRef = ImportString[Callable[..., Any]]


class RegistryConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    tests: dict[str, CallableRef] = {}
    handlers: dict[HandlerName, CallableRef] = {}
    input_transformer: CallableRef | None = None

    @field_validator("tests")
    @classmethod
    def test_names_must_not_be_blank(cls, v: dict[str, Any]) -> dict[str, Any]:
        for name in v:
            if not name.strip():
                raise ValueError("test names must not be blank")
        return v


def _split_options(raw: Mapping[Any, Any]) -> dict[str, Any]:
    """Separate reserved options from flat test registrations.

    ``tests``, ``handlers`` and ``input_transformer`` (optionally spelled with
    a leading dash) are options; every other key registers a test.
    """
    options: dict[str, Any] = {}
    flat_tests: dict[Any, Any] = {}

    for key, value in raw.items():
        if not isinstance(key, str):
            raise ConfigurationError(f"Test name must be a string, got {key!r}")
        option = key[1:] if key.startswith("-") else key
        if option not in RESERVED_OPTIONS:
            flat_tests[key] = value
            continue
        if option in options:
            raise ConfigurationError(f"Option '{option}' given more than once")
        options[option] = value

    nested = options.get("tests")
    if nested is None:
        nested = {}
    if not isinstance(nested, Mapping):
        raise ConfigurationError(
            f"'tests' must be a mapping of name to test, got {type(nested).__name__}"
        )

    duplicates = sorted(set(flat_tests) & set(nested))
    if duplicates:
        raise ConfigurationError(f"Test(s) registered more than once: {', '.join(duplicates)}")

    options["tests"] = {**nested, **flat_tests}
    if options.get("handlers") is None:
        options.pop("handlers", None)
    return options


def build_config(raw: RegistryConfig | Mapping[str, Any] | Any) -> RegistryConfig:
    """Normalise any accepted configuration shape into a ``RegistryConfig``.

    Accepts a ready ``RegistryConfig``, a flat or nested mapping, or any
    object exposing ``tests``/``handlers``/``input_transformer`` attributes.

    Raises ConfigurationError when the configuration is invalid.
    """
    if isinstance(raw, RegistryConfig):
        return raw

    if not isinstance(raw, Mapping):
        if not any(hasattr(raw, option) for option in RESERVED_OPTIONS):
            raise ConfigurationError(f"Unsupported registry configuration: {raw!r}")
        raw = {
            option: getattr(raw, option)
            for option in RESERVED_OPTIONS
            if getattr(raw, option, None) is not None
        }

    try:
        return RegistryConfig(**_split_options(raw))
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e


def load_config(path: Path) -> RegistryConfig:
    """Load and validate a registry config from a YAML file."""
    logger.debug(f"Loading registry config from {path}")
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(raw).__name__}")

    config = build_config(raw)
    logger.debug(
        f"Loaded {len(config.tests)} test(s) and {len(config.handlers)} handler override(s) from {path}"
    )
    return config
