"""Tests for infrastructure/adapters/gofmt.py."""

import subprocess
from collections.abc import Sequence

import pytest

from kitgen.domain.exceptions import FormatError, FormatterNotFoundError
from kitgen.infrastructure.adapters.gofmt import GofmtFormatter


def fake_run(
    returncode: int = 0, stdout: str = "", stderr: str = ""
) -> tuple[list[dict[str, object]], object]:
    """Build a subprocess.run replacement recording its calls."""
    calls: list[dict[str, object]] = []

    def run(command: Sequence[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls.append({"command": tuple(command), **kwargs})
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)

    return calls, run


class TestGofmtFormatter:
    """Tests for GofmtFormatter."""

    def test_empty_command_raises(self) -> None:
        with pytest.raises(ValueError, match="command"):
            GofmtFormatter(())

    def test_returns_stdout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls, run = fake_run(stdout="package p\n")
        monkeypatch.setattr(subprocess, "run", run)

        result = GofmtFormatter().format("package  p")

        assert result == "package p\n"
        assert calls[0]["command"] == ("gofmt",)
        assert calls[0]["input"] == "package  p"
        assert calls[0]["text"] is True

    def test_custom_command(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls, run = fake_run(stdout="x")
        monkeypatch.setattr(subprocess, "run", run)

        GofmtFormatter(["gofmt", "-s"]).format("x")

        assert calls[0]["command"] == ("gofmt", "-s")

    def test_rejected_source_carries_raw(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _, run = fake_run(returncode=2, stderr="<standard input>:3:1: expected declaration\n")
        monkeypatch.setattr(subprocess, "run", run)

        with pytest.raises(FormatError) as exc_info:
            GofmtFormatter().format("package p\n}}")

        assert exc_info.value.raw == "package p\n}}"
        assert exc_info.value.reason == "<standard input>:3:1: expected declaration"

    def test_failure_without_stderr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _, run = fake_run(returncode=3)
        monkeypatch.setattr(subprocess, "run", run)

        with pytest.raises(FormatError, match="exit status 3"):
            GofmtFormatter().format("x")

    def test_missing_executable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def run(command: Sequence[str], **kwargs: object) -> None:
            raise FileNotFoundError(command[0])

        monkeypatch.setattr(subprocess, "run", run)

        with pytest.raises(FormatterNotFoundError) as exc_info:
            GofmtFormatter(["no-such-gofmt"]).format("x")

        assert exc_info.value.command == "no-such-gofmt"
