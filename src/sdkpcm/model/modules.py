# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""SDK module and toolchain descriptions consumed and produced by PCM compilation."""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict

from sdkpcm.model.depset import DependencySet

# ###############
# Public Interface
# ###############

PCM_SUFFIX = ".pcm"

# Flags that stop the Clang importer from rejecting PCMs whose inputs were
# embedded rather than read from their original locations.
DEFAULT_PCH_VALIDATION_FLAGS: tuple[str, ...] = ("-Xcc", "-Xclang", "-Xcc", "-fno-validate-pch")


class UncompiledSdkModuleInfo(BaseModel):
    """An SDK module that still has to be compiled into a PCM."""

    model_config = ConfigDict(frozen=True)

    name: str
    module_name: str
    is_framework: bool
    input_relative_path: str
    partial_cmd: tuple[str, ...] = ()


class ToolchainContext(BaseModel):
    """Toolchain settings shared by every compile in one build configuration.

    Attributes:
        compiler: Path to the compiler executable.
        sdk_path: Root of the platform SDK.
        resource_dir: Compiler resource directory, if the toolchain has one.
        compiler_flags: Base flags applied to every compile.
        target: Target triple.
        pch_validation_flags: Flags disabling PCH validation, appended to the
            shared PCM compilation arguments.
    """

    model_config = ConfigDict(frozen=True)

    compiler: str
    sdk_path: str
    resource_dir: str | None = None
    compiler_flags: tuple[str, ...] = ()
    target: str
    pch_validation_flags: tuple[str, ...] = DEFAULT_PCH_VALIDATION_FLAGS


class OutputArtifact(BaseModel):
    """A declared build output.

    ``short_path`` is the file name owned by the module; ``path`` is where the
    compiler is told to write it.
    """

    model_config = ConfigDict(frozen=True)

    short_path: str
    path: str


class CompiledModuleInfo(BaseModel):
    """Metadata for an SDK module whose PCM compile has been declared."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    module_name: str
    is_framework: bool
    output_artifact: OutputArtifact
    is_swiftmodule: bool = False
    deps: DependencySet
    input_relative_path: str


def declare_pcm_output(module_name: str, output_root: str = "") -> OutputArtifact:
    """Declare the PCM artifact for *module_name* under *output_root*."""
    short_path = module_name + PCM_SUFFIX
    path = str(PurePosixPath(output_root) / short_path) if output_root else short_path
    return OutputArtifact(short_path=short_path, path=path)
