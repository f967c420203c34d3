# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model for SDK module PCM compilation (modules, toolchain, dependency sets)."""

from sdkpcm.model.depset import DependencySet, DependencySetArena, Projection
from sdkpcm.model.modules import (
    DEFAULT_PCH_VALIDATION_FLAGS,
    PCM_SUFFIX,
    CompiledModuleInfo,
    OutputArtifact,
    ToolchainContext,
    UncompiledSdkModuleInfo,
    declare_pcm_output,
)

__all__ = [
    # Dependency sets
    "DependencySet",
    "DependencySetArena",
    "Projection",
    # Modules and toolchain
    "DEFAULT_PCH_VALIDATION_FLAGS",
    "PCM_SUFFIX",
    "CompiledModuleInfo",
    "OutputArtifact",
    "ToolchainContext",
    "UncompiledSdkModuleInfo",
    "declare_pcm_output",
]
