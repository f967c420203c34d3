# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Planning of SDK module compiles from a manifest.

Modules are visited in manifest order.  Declared dependencies are planned
before their dependents, so each module's dependency set only references
modules that are already registered.  The dependency set of a module has one
child per direct dependency; that child holds the dependency's compiled info
and, below it, the dependency's own dependency set.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from sdkpcm.compiler.command import SdkPcmCompileAction, assemble_sdk_module_compile, make_sdk_dependency_arena
from sdkpcm.compiler.paths import ConfigurationError, StructuralPathError
from sdkpcm.compiler.registry import ModuleRegistry, RegistryCollisionError
from sdkpcm.model.depset import DependencySet, DependencySetArena
from sdkpcm.model.modules import ToolchainContext

if TYPE_CHECKING:
    from sdkpcm.workspace.manifest import Manifest, ManifestModule

_LOGGER = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

PLAN_FORMAT_VERSION = "1"


class PlanError(Exception):
    """Raised when a manifest's modules cannot be planned."""


def plan_sdk_modules(manifest: Manifest, *, registry: ModuleRegistry | None = None) -> list[SdkPcmCompileAction]:
    """Plan one compile action per manifest module, dependencies first.

    Args:
        manifest: The validated manifest.
        registry: Registry to record compiled modules in.  A fresh registry
            is used when omitted.

    Returns:
        The compile actions in dependency-first order.

    Raises:
        PlanError: On unknown dependencies, dependency cycles, or any error
            assembling a module's compile.
    """
    planner = _Planner(manifest, registry if registry is not None else ModuleRegistry())
    for module in manifest.modules:
        planner.plan(module.name)
    _LOGGER.debug("Planned %d SDK module compile(s)", len(planner.actions))
    return planner.actions


def serialize_plan(actions: list[SdkPcmCompileAction]) -> str:
    """Serialize compile actions to a compact JSON string."""
    return json.dumps(
        {"v": PLAN_FORMAT_VERSION, "actions": [a.to_dict() for a in actions]},
        separators=(",", ":"),
    )


def write_plan(actions: list[SdkPcmCompileAction], path: Path) -> None:
    """Write the serialized plan to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_plan(actions), encoding="utf-8")


# ################
# Implementation
# ################


class _Planner:
    def __init__(self, manifest: Manifest, registry: ModuleRegistry) -> None:
        self.toolchain: ToolchainContext = manifest.toolchain.to_context()
        self.output_root = manifest.output_root
        self.registry = registry
        self.arena: DependencySetArena = make_sdk_dependency_arena()
        self.modules: dict[str, ManifestModule] = {m.name: m for m in manifest.modules}
        self.actions: list[SdkPcmCompileAction] = []
        # Node holding a planned module's compiled info above its own deps.
        self.nodes: dict[str, DependencySet] = {}
        self.in_progress: set[str] = set()

    def plan(self, name: str) -> DependencySet:
        if name in self.nodes:
            return self.nodes[name]
        if name in self.in_progress:
            raise PlanError(f"Circular dependency detected involving SDK module '{name}'")

        module = self.modules[name]
        self.in_progress.add(name)
        try:
            children: list[DependencySet] = []
            for dep in module.deps:
                if dep not in self.modules:
                    raise PlanError(f"SDK module '{name}' depends on unknown module '{dep}'")
                children.append(self.plan(dep))
            deps = self.arena.make(children=children)

            uncompiled = module.to_uncompiled(self.toolchain)
            try:
                action = assemble_sdk_module_compile(
                    self.toolchain,
                    deps,
                    uncompiled,
                    self.registry,
                    output_root=self.output_root,
                )
            except (ConfigurationError, StructuralPathError, RegistryCollisionError) as exc:
                raise PlanError(f"Cannot plan SDK module '{name}': {exc}") from exc
        finally:
            self.in_progress.discard(name)

        info = self.registry.get(uncompiled.module_name)
        node = self.arena.make(value=info, children=[deps])
        self.nodes[name] = node
        self.actions.append(action)
        return node
