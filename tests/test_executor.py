"""Tests for launching resolved commands."""

from __future__ import annotations

import io
import os
import subprocess
from typing import Any

import pytest

from connkit.config import ExecMode
from connkit.errors import LaunchError
from connkit.executor import announce, execute
from connkit.resolver import ConnectionCommand

COMMAND = ConnectionCommand("ssh", ["-p", "2222", "alice@db1.example.com"])


class _Replaced(Exception):
    pass


def test_announce_writes_command_line() -> None:
    stream = io.StringIO()
    announce(COMMAND, stream)
    assert stream.getvalue() == "Executing: ssh -p 2222 alice@db1.example.com\n"


def test_spawn_returns_exit_code(monkeypatch: Any) -> None:
    """Spawn mode returns the child's exit code verbatim."""
    seen: list[list[str]] = []

    def fake_run(argv: list[str], check: bool) -> subprocess.CompletedProcess[bytes]:
        seen.append(argv)
        return subprocess.CompletedProcess(argv, 255)

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert execute(COMMAND, ExecMode.spawn, stream=io.StringIO()) == 255
    assert seen == [["ssh", "-p", "2222", "alice@db1.example.com"]]


def test_spawn_missing_program(monkeypatch: Any) -> None:
    """A program that cannot be started raises LaunchError."""

    def fake_run(argv: list[str], check: bool) -> subprocess.CompletedProcess[bytes]:
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(LaunchError, match="Failed to launch 'ssh': No such file or directory"):
        execute(COMMAND, ExecMode.spawn, stream=io.StringIO())


@pytest.mark.skipif(os.name != "posix", reason="process replacement is POSIX-only")
class TestReplaceMode:
    def test_execvp_receives_argv(self, monkeypatch: Any) -> None:
        """Replace mode hands the full argv to execvp."""
        calls: list[tuple[str, list[str]]] = []

        def fake_execvp(program: str, argv: list[str]) -> None:
            calls.append((program, argv))
            raise _Replaced

        monkeypatch.setattr(os, "execvp", fake_execvp)

        with pytest.raises(_Replaced):
            execute(COMMAND, ExecMode.replace, stream=io.StringIO())
        assert calls == [("ssh", ["ssh", "-p", "2222", "alice@db1.example.com"])]

    def test_execvp_failure(self, monkeypatch: Any) -> None:
        """An exec failure becomes a LaunchError naming the program."""

        def fake_execvp(program: str, argv: list[str]) -> None:
            raise FileNotFoundError(2, "No such file or directory")

        monkeypatch.setattr(os, "execvp", fake_execvp)

        with pytest.raises(LaunchError) as exc_info:
            execute(COMMAND, ExecMode.replace, stream=io.StringIO())
        assert exc_info.value.program == "ssh"
