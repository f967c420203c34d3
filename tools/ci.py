#!/usr/bin/env python3
# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, plan smoke test, and build."""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

EXAMPLE_MANIFEST = "docs/examples/ios-sdk.yaml"

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=sdkpcm", "--cov-report=term-missing"]),
    ("Plan example", ["uv", "run", "sdkpcm", "plan", EXAMPLE_MANIFEST, "--format", "json"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and report a summary."""
    parser = argparse.ArgumentParser(description="Run sdkpcm CI checks locally")
    parser.add_argument(
        "--only",
        action="append",
        default=None,
        metavar="STEP",
        help="Run only the named step (repeatable), e.g. --only Tests",
    )
    args = parser.parse_args()

    steps = [s for s in STEPS if args.only is None or s[0] in args.only]
    if not steps:
        print(chalk.red(f"No CI step matches {args.only}"), file=sys.stderr)
        return 2

    results = [_run_step(name, cmd) for name, cmd in steps]
    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}\n{chalk.blue(name)}\n{sep}")
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}\n{chalk.blue('  Summary')}\n{sep}")
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))
    print()


if __name__ == "__main__":
    sys.exit(main())
