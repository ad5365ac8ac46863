"""Tests for the stock file and command checks."""

import pytest

from tripwire import AssertionFailure, CheckResult, ConfigurationError
from tripwire.checks import (
    command_fails,
    command_succeeds,
    expand_path_args,
    file_contains,
    filesystem_registry,
    is_dir,
    is_file,
    path_exists,
)


# --- path checks ---


def test_path_exists_pass(tmp_path):
    (tmp_path / "main.tf").write_text("resource {}")
    result = path_exists(tmp_path / "main.tf")
    assert isinstance(result, CheckResult)
    assert result.status is True
    assert result.message == f"{tmp_path / 'main.tf'} exists"


def test_path_exists_fail(tmp_path):
    status, message = path_exists(str(tmp_path / "missing.tf"))
    assert status is False
    assert message == f"{tmp_path / 'missing.tf'} missing"


def test_is_file_and_is_dir(tmp_path):
    (tmp_path / "a.txt").write_text("a")
    assert is_file(tmp_path / "a.txt").status is True
    assert is_file(tmp_path).status is False
    assert is_dir(tmp_path).status is True
    assert is_dir(tmp_path / "a.txt").status is False


# --- file_contains ---


def test_file_contains_pass(tmp_path):
    (tmp_path / "main.tf").write_text('resource "aws_s3_bucket" "b" {}')
    assert file_contains(tmp_path / "main.tf", r"aws_s3_bucket").status is True


def test_file_contains_fail(tmp_path):
    (tmp_path / "main.tf").write_text("resource {}")
    result = file_contains(tmp_path / "main.tf", r"aws_s3_bucket")
    assert result.status is False
    assert "does not match" in result.message


def test_file_contains_missing_file(tmp_path):
    result = file_contains(tmp_path / "nope.tf", r"anything")
    assert result.status is False
    assert "not found" in result.message


# --- commands ---


def test_command_succeeds_pass(tmp_path):
    assert command_succeeds("echo hello", cwd=tmp_path).status is True


def test_command_succeeds_fail(tmp_path):
    result = command_succeeds("false", cwd=tmp_path)
    assert result.status is False
    assert "exited with code 1" in result.message


def test_command_fails_pass(tmp_path):
    assert command_fails("false", cwd=tmp_path).status is True


def test_command_fails_fail(tmp_path):
    assert command_fails("true", cwd=tmp_path).status is False


def test_command_timeout(tmp_path):
    assert command_succeeds("sleep 5", cwd=tmp_path, timeout=1).status is False
    assert command_fails("sleep 5", cwd=tmp_path, timeout=1).status is True


# --- expand_path_args ---


def test_expand_path_args_first_argument_by_default(monkeypatch):
    monkeypatch.setenv("TRIPWIRE_ROOT", "/srv/data")
    assert expand_path_args("exists", "$TRIPWIRE_ROOT/x", "$TRIPWIRE_ROOT/y", 3) == (
        "/srv/data/x",
        "$TRIPWIRE_ROOT/y",
        3,
    )


def test_expand_path_args_home(monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    assert expand_path_args("is_dir", "~/y") == ("/home/tester/y",)


def test_expand_path_args_leaves_pattern_alone(monkeypatch):
    monkeypatch.setenv("TRIPWIRE_ROOT", "/srv/data")
    assert expand_path_args("file_contains", "$TRIPWIRE_ROOT/f", r"cost \$5 $TRIPWIRE_ROOT") == (
        "/srv/data/f",
        r"cost \$5 $TRIPWIRE_ROOT",
    )


def test_expand_path_args_command_checks_expand_cwd_only(monkeypatch):
    monkeypatch.setenv("TRIPWIRE_ROOT", "/srv/data")
    for name in ("command_succeeds", "command_fails"):
        assert expand_path_args(name, 'echo "$TRIPWIRE_ROOT"', "$TRIPWIRE_ROOT", 5) == (
            'echo "$TRIPWIRE_ROOT"',
            "/srv/data",
            5,
        )


def test_expand_path_args_default(monkeypatch):
    monkeypatch.delenv("TRIPWIRE_UNSET", raising=False)
    assert expand_path_args("exists", "${TRIPWIRE_UNSET:-/fallback}/z") == ("/fallback/z",)


# --- filesystem_registry ---


def test_filesystem_registry_expands_for_test_only(monkeypatch, tmp_path, recorder):
    (tmp_path / "data.csv").write_text("a,b")
    monkeypatch.setenv("TRIPWIRE_ROOT", str(tmp_path))
    handler = recorder(returns=lambda status, message, name, *args: (status, message, args))

    reg = filesystem_registry(test=handler)

    status, message, args = reg.test("path_exists", "$TRIPWIRE_ROOT/data.csv")
    assert status is True
    assert message == f"{tmp_path / 'data.csv'} exists"
    assert args == ("$TRIPWIRE_ROOT/data.csv",)


def test_filesystem_registry_escaped_dollar_pattern(tmp_path):
    (tmp_path / "price.txt").write_text("cost $5")
    reg = filesystem_registry()
    assert reg.test("file_contains", str(tmp_path / "price.txt"), r"cost \$5") is True


def test_filesystem_registry_command_keeps_shell_variables(tmp_path):
    reg = filesystem_registry()
    assert reg.test("command_succeeds", 'X=1; test "$X" = 1') is True
    assert reg.test("command_fails", 'X=1; test "$X" = 2') is True


def test_filesystem_registry_expands_command_cwd(monkeypatch, tmp_path):
    (tmp_path / "data.csv").write_text("a,b")
    monkeypatch.setenv("TRIPWIRE_ROOT", str(tmp_path))
    reg = filesystem_registry()
    assert reg.test("command_succeeds", "test -f data.csv", "$TRIPWIRE_ROOT") is True


def test_filesystem_registry_must(tmp_path):
    reg = filesystem_registry()
    assert reg.must("is_dir", str(tmp_path)) == str(tmp_path)
    with pytest.raises(AssertionFailure, match="is not a file"):
        reg.must("is_file", str(tmp_path))


def test_filesystem_registry_should_logs(tmp_path, caplog):
    reg = filesystem_registry()
    reg.should("file_contains", str(tmp_path / "nope.txt"), "x")
    assert any(r.getMessage() == f"{tmp_path / 'nope.txt'} not found" for r in caplog.records)


def test_filesystem_registry_rejects_unknown_handler():
    with pytest.raises(ConfigurationError):
        filesystem_registry(shout=lambda *a: None)
