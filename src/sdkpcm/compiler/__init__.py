# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""SDK module PCM compilation: path expansion, command assembly, and registry."""

from sdkpcm.compiler.command import (
    CLANG_DEPS_PROJECTION,
    SYSTEM_MODULE_ARGS,
    SdkPcmCompileAction,
    assemble_sdk_module_compile,
    make_sdk_dependency_arena,
    project_as_clang_deps,
    shared_pcm_compilation_args,
)
from sdkpcm.compiler.paths import (
    ConfigurationError,
    SearchPathKind,
    StructuralPathError,
    expand_sdk_path,
    resolve_search_path,
    search_path_args,
)
from sdkpcm.compiler.plan import PlanError, plan_sdk_modules, serialize_plan, write_plan
from sdkpcm.compiler.registry import ModuleRegistry, NotFoundError, RegistryCollisionError

__all__ = [
    "expand_sdk_path",
    "resolve_search_path",
    "search_path_args",
    "SearchPathKind",
    "ConfigurationError",
    "StructuralPathError",
    "shared_pcm_compilation_args",
    "project_as_clang_deps",
    "make_sdk_dependency_arena",
    "assemble_sdk_module_compile",
    "SdkPcmCompileAction",
    "CLANG_DEPS_PROJECTION",
    "SYSTEM_MODULE_ARGS",
    "ModuleRegistry",
    "NotFoundError",
    "RegistryCollisionError",
    "plan_sdk_modules",
    "serialize_plan",
    "write_plan",
    "PlanError",
]
