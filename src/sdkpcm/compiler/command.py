# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of reproducible compiler invocations for SDK module PCMs.

Every SDK module is compiled with the same shared flag sequence
(:func:`shared_pcm_compilation_args`), which makes the resulting PCM
independent of the machine and directory it was produced in.  The full
invocation (:func:`assemble_sdk_module_compile`) then layers the module's own
flags, the toolchain, and the flattened dependency closure in a fixed order.
Later flags can override earlier ones, so the order is part of the contract.
"""

from __future__ import annotations

import logging
import shlex
from typing import Any

from pydantic import BaseModel, ConfigDict

from sdkpcm.compiler.paths import expand_sdk_path, search_path_args
from sdkpcm.compiler.registry import ModuleRegistry
from sdkpcm.model.depset import DependencySet, DependencySetArena
from sdkpcm.model.modules import (
    CompiledModuleInfo,
    OutputArtifact,
    ToolchainContext,
    UncompiledSdkModuleInfo,
    declare_pcm_output,
)

_LOGGER = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

CLANG_DEPS_PROJECTION = "clang_deps"
SDK_PCM_COMPILE_CATEGORY = "sdk_swift_pcm_compile"

# Emit the module as a system module, bypassing the Swift driver.
SYSTEM_MODULE_ARGS: tuple[str, ...] = (
    "-Xcc",
    "-Xclang",
    "-Xcc",
    "-emit-module",
    "-Xcc",
    "-Xclang",
    "-Xcc",
    "-fsystem-module",
)


class SdkPcmCompileAction(BaseModel):
    """A compiler invocation producing one SDK module PCM."""

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...]
    output: OutputArtifact
    category: str = SDK_PCM_COMPILE_CATEGORY
    identifier: str

    @property
    def executable(self) -> str:
        return self.argv[0]

    @property
    def arguments(self) -> tuple[str, ...]:
        return self.argv[1:]

    def shell_command(self) -> str:
        return shlex.join(self.argv)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "identifier": self.identifier,
            "output": self.output.path,
            "argv": list(self.argv),
        }


def shared_pcm_compilation_args(
    target: str,
    module_name: str,
    pch_validation_flags: tuple[str, ...] = (),
) -> tuple[str, ...]:
    """Return the flags shared by every SDK module PCM compile."""
    args = [
        "-emit-pcm",
        "-target",
        target,
        "-module-name",
        module_name,
        "-Xfrontend",
        "-disable-implicit-swift-modules",
        "-Xcc",
        "-fno-implicit-modules",
        "-Xcc",
        "-fno-implicit-module-maps",
        # Raw format drops debug info, which would embed absolute paths and
        # make PCM sizes differ between machines.
        "-Xcc",
        "-Xclang",
        "-Xcc",
        "-fmodule-format=raw",
        # Embed every input so module maps need not be shipped to remote workers.
        "-Xcc",
        "-Xclang",
        "-Xcc",
        "-fmodules-embed-all-files",
        # Record inputs relative to the working directory.
        "-Xcc",
        "-Xclang",
        "-Xcc",
        "-fmodule-file-home-is-cwd",
        # Builtin headers such as float.h are not found from an empty working
        # directory without this.
        "-Xcc",
        "-I.",
    ]
    args.extend(pch_validation_flags)
    return tuple(args)


def project_as_clang_deps(info: CompiledModuleInfo) -> list[str]:
    """Arguments making a compiled PCM and its module map visible to Clang."""
    if info.is_swiftmodule:
        return []
    return [
        "-Xcc",
        f"-fmodule-file={info.module_name}={info.output_artifact.path}",
        "-Xcc",
        f"-fmodule-map-file={info.input_relative_path}",
    ]


def make_sdk_dependency_arena() -> DependencySetArena:
    """Create an arena with the projections SDK module compiles use."""
    return DependencySetArena({CLANG_DEPS_PROJECTION: project_as_clang_deps})


def assemble_sdk_module_compile(
    toolchain: ToolchainContext,
    deps: DependencySet,
    module: UncompiledSdkModuleInfo,
    registry: ModuleRegistry,
    *,
    output_root: str = "",
) -> SdkPcmCompileAction:
    """Build the compile action for *module* and register its compiled info.

    The registry entry is written before returning, so later requests in the
    same evaluation can depend on the module before its PCM exists.

    Args:
        toolchain: Toolchain of the current build configuration.
        deps: Dependency set with the module's already-compiled dependencies.
        module: The module to compile.
        registry: Registry of the current build evaluation.
        output_root: Directory the PCM is declared in.

    Returns:
        The compile action.

    Raises:
        ConfigurationError: If a path needs a resource directory the toolchain
            does not have.
        StructuralPathError: If the module map path is absolute or does not
            match the module's framework layout.
        RegistryCollisionError: If the module is already registered.
    """
    module_name = module.module_name

    argv: list[str] = [toolchain.compiler]
    argv.extend(module.partial_cmd)
    argv.extend(["-sdk", toolchain.sdk_path])
    argv.extend(toolchain.compiler_flags)
    if toolchain.resource_dir:
        argv.extend(["-resource-dir", toolchain.resource_dir])
    argv.extend(deps.project_as_args(CLANG_DEPS_PROJECTION))

    modulemap_path = str(expand_sdk_path(toolchain.sdk_path, toolchain.resource_dir, module.input_relative_path))
    output = declare_pcm_output(module_name, output_root)
    argv.extend(["-o", output.path, modulemap_path])
    argv.extend(SYSTEM_MODULE_ARGS)
    argv.extend(
        search_path_args(
            toolchain.sdk_path,
            toolchain.resource_dir,
            module.input_relative_path,
            module.is_framework,
        )
    )

    registry.set(
        module_name,
        CompiledModuleInfo(
            name=module.name,
            module_name=module_name,
            is_framework=module.is_framework,
            output_artifact=output,
            is_swiftmodule=False,
            deps=deps,
            input_relative_path=modulemap_path,
        ),
    )
    action = SdkPcmCompileAction(argv=tuple(argv), output=output, identifier=module_name)
    _LOGGER.debug("Assembled %s for %s: %s", action.category, module_name, action.shell_command())
    return action
