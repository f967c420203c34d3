# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the sdkpcm command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from sdkpcm.compiler.plan import PlanError, plan_sdk_modules, serialize_plan, write_plan
from sdkpcm.workspace.manifest import ManifestError, load_manifest

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the sdkpcm CLI."""
    parser = argparse.ArgumentParser(
        prog="sdkpcm",
        description="sdkpcm - plan reproducible PCM compiles for platform SDK modules",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each assembled compile and registry write",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # plan subcommand
    plan_parser = subparsers.add_parser(
        "plan",
        help="Print the compiler invocations for the SDK modules in a manifest",
        description="Assemble one PCM compile per SDK module declared in a manifest.",
    )
    plan_parser.add_argument("manifest", help="Path to the YAML manifest")
    plan_parser.add_argument(
        "--format",
        choices=["shell", "json"],
        default="shell",
        help="Output format (default: shell)",
    )
    plan_parser.add_argument(
        "--output",
        default=None,
        help="Write the JSON plan to this file instead of printing it",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "plan":
        return _cmd_plan(args)
    return 0


def _cmd_plan(args: argparse.Namespace) -> int:
    """Handle the plan subcommand."""
    try:
        manifest = load_manifest(Path(args.manifest))
    except ManifestError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not manifest.modules:
        print("No SDK modules declared in the manifest.")
        return 0

    try:
        actions = plan_sdk_modules(manifest)
    except PlanError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.output is not None:
        output = Path(args.output)
        try:
            write_plan(actions, output)
        except OSError as exc:
            print(f"Error: cannot write plan '{output}': {exc}", file=sys.stderr)
            return 1
        print(f"Wrote {len(actions)} SDK module compile(s) to '{output}'.")
        return 0

    if args.format == "json":
        print(serialize_plan(actions))
    else:
        for action in actions:
            print(action.shell_command())
    return 0
