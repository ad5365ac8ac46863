"""Named tests dispatched through configurable handlers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from tripwire.base import Handler, HandlerName, InputTransformer, Test
from tripwire.config import RegistryConfig, build_config, load_config
from tripwire.errors import MalformedTestResult, UnknownHandler, UnknownTest
from tripwire.handlers import DEFAULT_HANDLERS

logger = logging.getLogger(__name__)


class Registry:
    """A fixed set of named tests and the handlers that report on them.

    Build one from a ``RegistryConfig`` or from a mapping, either flat::

        Registry({"exists": path_exists, "input_transformer": expand_path_args})

    or nested::

        Registry({"tests": {"exists": path_exists}, "handlers": {"should": ...}})

    then call it from inside your own code::

        path = checks.must("exists", path)

    Nothing can be added or replaced after construction.
    """

    def __init__(self, config: RegistryConfig | Mapping[str, Any] | Any = None):
        config = build_config({} if config is None else config)

        handlers = {name.value: handler for name, handler in DEFAULT_HANDLERS.items()}
        handlers.update({name.value: handler for name, handler in config.handlers.items()})

        self._tests: Mapping[str, Test] = MappingProxyType(dict(config.tests))
        self._handlers: Mapping[str, Handler] = MappingProxyType(handlers)
        self._input_transformer: InputTransformer | None = config.input_transformer

        logger.debug(
            f"Registry built with tests={sorted(self._tests)} "
            f"overrides={sorted(name.value for name in config.handlers)} "
            f"input_transformer={self._input_transformer is not None}"
        )

    @classmethod
    def from_tests(
        cls,
        tests: Mapping[str, Test],
        *,
        handlers: Mapping[str, Handler] | None = None,
        input_transformer: InputTransformer | None = None,
    ) -> Registry:
        """Build a registry from a plain name -> test mapping."""
        return cls(
            {
                "tests": dict(tests),
                "handlers": dict(handlers or {}),
                "input_transformer": input_transformer,
            }
        )

    @classmethod
    def from_file(cls, path: str | Path) -> Registry:
        """Build a registry from a YAML config file."""
        return cls(load_config(Path(path)))

    @property
    def tests(self) -> Mapping[str, Test]:
        return self._tests

    @property
    def handlers(self) -> Mapping[str, Handler]:
        return self._handlers

    @property
    def input_transformer(self) -> InputTransformer | None:
        return self._input_transformer

    def __contains__(self, test_name: object) -> bool:
        return test_name in self._tests

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tests={sorted(self._tests)!r})"

    def invoke(self, handler: str | HandlerName | Handler, test_name: str, *args: Any) -> Any:
        """Run ``test_name`` and pass its outcome to ``handler``.

        ``handler`` is a handler name or a handler callable. The test receives
        the transformed arguments; the handler receives the original ones and
        its return value is returned unchanged.

        Raises UnknownTest / UnknownHandler for unregistered names and
        MalformedTestResult when the test does not return ``(status, message)``.
        """
        try:
            check = self._tests[test_name]
        except (KeyError, TypeError):
            raise UnknownTest(test_name) from None

        handle = self._resolve_handler(handler)
        status, message = self._run_test(test_name, check, self._transform(test_name, args))
        return handle(status, message, test_name, *args)

    def _resolve_handler(self, handler: str | HandlerName | Handler) -> Handler:
        if callable(handler):
            return handler
        name = handler.value if isinstance(handler, HandlerName) else handler
        try:
            return self._handlers[name]
        except (KeyError, TypeError):
            raise UnknownHandler(name) from None

    def _transform(self, test_name: str, args: tuple[Any, ...]) -> tuple[Any, ...]:
        if self._input_transformer is None:
            return args
        transformed = self._input_transformer(test_name, *args)
        if isinstance(transformed, (tuple, list)):
            return tuple(transformed)
        return (transformed,)

    @staticmethod
    def _run_test(test_name: str, check: Test, args: tuple[Any, ...]) -> tuple[Any, str]:
        result = check(*args)
        if (
            not isinstance(result, (tuple, list))
            or len(result) != 2
            or not isinstance(result[1], str)
        ):
            raise MalformedTestResult(test_name, result)
        return result[0], result[1]

    # Convenience entry points, one per built-in handler.

    def test(self, test_name: str, *args: Any) -> Any:
        return self.invoke(HandlerName.TEST, test_name, *args)

    def log(self, test_name: str, *args: Any) -> Any:
        return self.invoke(HandlerName.LOG, test_name, *args)

    def should(self, test_name: str, *args: Any) -> Any:
        return self.invoke(HandlerName.SHOULD, test_name, *args)

    def should_not(self, test_name: str, *args: Any) -> Any:
        return self.invoke(HandlerName.SHOULD_NOT, test_name, *args)

    def must(self, test_name: str, *args: Any) -> Any:
        return self.invoke(HandlerName.MUST, test_name, *args)

    def must_not(self, test_name: str, *args: Any) -> Any:
        return self.invoke(HandlerName.MUST_NOT, test_name, *args)
