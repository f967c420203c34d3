# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the sdkpcm CLI entry point."""

import json
import logging
import sys
from pathlib import Path

import pytest

from sdkpcm.cli.main import main

# ###############
# Helpers
# ###############

_MANIFEST = """\
toolchain:
  compiler: /usr/bin/swiftc
  sdk-path: /SDK
  target: arm64-apple-ios15.0
modules:
  - name: Foundation
    framework: true
    modulemap: Foundation.framework/Modules/module.modulemap
    deps: [Darwin]
  - name: Darwin
    modulemap: usr/include/module.modulemap
"""


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["sdkpcm", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _write(tmp_path: Path, content: str = _MANIFEST) -> Path:
    path = tmp_path / "sdk-modules.yaml"
    path.write_text(content, encoding="utf-8")
    return path


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


def test_plan_prints_shell_commands(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """plan prints one shell command per module, dependencies first."""
    assert _run(monkeypatch, "plan", str(_write(tmp_path))) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("/usr/bin/swiftc -emit-pcm")
    assert "-o Darwin.pcm" in lines[0]
    assert "-o Foundation.pcm" in lines[1]
    assert lines[1].endswith("-Xcc -F -Xcc /SDK")


def test_plan_json(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """plan --format json prints the serialized plan."""
    assert _run(monkeypatch, "plan", str(_write(tmp_path)), "--format", "json") == 0
    data = json.loads(capsys.readouterr().out)
    assert [a["identifier"] for a in data["actions"]] == ["Darwin", "Foundation"]


def test_plan_output_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """plan --output writes the JSON plan to a file."""
    output = tmp_path / "build" / "plan.json"
    assert _run(monkeypatch, "plan", str(_write(tmp_path)), "--output", str(output)) == 0
    assert "Wrote 2 SDK module compile(s)" in capsys.readouterr().out
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["actions"][1]["output"] == "Foundation.pcm"


def test_plan_verbose_configures_debug_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """plan -v configures debug logging before planning."""
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    assert _run(monkeypatch, "-v", "plan", str(_write(tmp_path))) == 0
    assert calls[0]["level"] == logging.DEBUG


def test_plan_empty_manifest(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """plan with no modules reports nothing to do."""
    content = "toolchain:\n  compiler: swiftc\n  sdk-path: /SDK\n  target: t\n"
    assert _run(monkeypatch, "plan", str(_write(tmp_path, content))) == 0
    assert "No SDK modules declared" in capsys.readouterr().out


def test_plan_missing_manifest(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """plan exits with 1 when the manifest does not exist."""
    assert _run(monkeypatch, "plan", str(tmp_path / "missing.yaml")) == 1
    assert "Error: Manifest file not found" in capsys.readouterr().err


def test_plan_error_exits_one(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """plan exits with 1 when a module cannot be planned."""
    content = _MANIFEST.replace("deps: [Darwin]", "deps: [Missing]")
    assert _run(monkeypatch, "plan", str(_write(tmp_path, content))) == 1
    assert "unknown module 'Missing'" in capsys.readouterr().err
