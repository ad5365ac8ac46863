"""Stock tests for files and shell commands, plus a path-expanding transformer."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Any

from expandvars import expandvars

from tripwire.base import CheckResult
from tripwire.registry import Registry

logger = logging.getLogger(__name__)


def path_exists(path: str | Path) -> CheckResult:
    """Check that a path exists."""
    passed = Path(path).exists()
    logger.debug(f"Path {path} exists={passed}")
    return CheckResult(passed, f"{path} exists" if passed else f"{path} missing")


def is_file(path: str | Path) -> CheckResult:
    passed = Path(path).is_file()
    return CheckResult(passed, f"{path} is a file" if passed else f"{path} is not a file")


def is_dir(path: str | Path) -> CheckResult:
    passed = Path(path).is_dir()
    return CheckResult(
        passed, f"{path} is a directory" if passed else f"{path} is not a directory"
    )


def file_contains(path: str | Path, pattern: str) -> CheckResult:
    """Check that a file contains text matching a regex pattern."""
    path = Path(path)
    logger.info(f"Checking {path} for pattern '{pattern}'")

    if not path.exists():
        logger.warning(f"File {path} not found")
        return CheckResult(False, f"{path} not found")

    matched = re.search(pattern, path.read_text()) is not None
    logger.info(f"Pattern '{pattern}' matched={matched} in {path}")

    if matched:
        return CheckResult(True, f"{path} matches pattern '{pattern}'")
    return CheckResult(False, f"{path} does not match pattern '{pattern}'")


def _run_command(command: str, cwd: str | Path | None, timeout: int) -> int | None:
    """Run a shell command and return its exit code, or None on timeout."""
    logger.info(f"Running command: {command}")
    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            timeout=timeout,
            capture_output=True,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Command timed out after {timeout}s")
        return None

    logger.info(f"Command exited with code {result.returncode}")
    if result.stdout:
        logger.debug(f"stdout: {result.stdout.decode('utf-8', errors='replace')}")
    if result.stderr:
        logger.debug(f"stderr: {result.stderr.decode('utf-8', errors='replace')}")
    return result.returncode


def command_succeeds(
    command: str, cwd: str | Path | None = None, timeout: int = 60
) -> CheckResult:
    """Check that a shell command exits with code 0."""
    code = _run_command(command, cwd, timeout)
    if code is None:
        return CheckResult(False, f"'{command}' timed out after {timeout}s")
    return CheckResult(code == 0, f"'{command}' exited with code {code}")


def command_fails(
    command: str, cwd: str | Path | None = None, timeout: int = 60
) -> CheckResult:
    """Check that a shell command exits with a non-zero code.

    A timeout counts as a failure of the command.
    """
    code = _run_command(command, cwd, timeout)
    if code is None:
        return CheckResult(True, f"'{command}' timed out after {timeout}s (counts as failure)")
    return CheckResult(code != 0, f"'{command}' exited with code {code}")


# Positional indexes holding paths; patterns and shell commands are never expanded
PATH_POSITIONS: dict[str, frozenset[int]] = {
    "path_exists": frozenset({0}),
    "is_file": frozenset({0}),
    "is_dir": frozenset({0}),
    "file_contains": frozenset({0}),
    "command_succeeds": frozenset({1}),
    "command_fails": frozenset({1}),
}
_DEFAULT_PATH_POSITIONS = frozenset({0})


def expand_path_args(test_name: str, *args: Any) -> tuple[Any, ...]:
    """Input transformer: expand ``$VAR``, ``${VAR:-default}`` and ``~`` in path arguments.

    Which arguments are paths is looked up by ``test_name`` in
    ``PATH_POSITIONS`` (the ``cwd`` of command checks, the first argument of
    the path checks). Tests not listed there get only their first argument
    expanded. Non-string arguments pass through untouched.
    """
    positions = PATH_POSITIONS.get(test_name, _DEFAULT_PATH_POSITIONS)
    return tuple(
        os.path.expanduser(expandvars(arg)) if i in positions and isinstance(arg, str) else arg
        for i, arg in enumerate(args)
    )


FILESYSTEM_TESTS = {
    "path_exists": path_exists,
    "is_file": is_file,
    "is_dir": is_dir,
    "file_contains": file_contains,
    "command_succeeds": command_succeeds,
    "command_fails": command_fails,
}


def filesystem_registry(**handlers: Any) -> Registry:
    """A registry with the stock checks above and ``expand_path_args`` as transformer.

    Keyword arguments override built-in handlers, e.g. ``must=my_must``.
    """
    return Registry.from_tests(
        FILESYSTEM_TESTS, handlers=handlers, input_transformer=expand_path_args
    )
