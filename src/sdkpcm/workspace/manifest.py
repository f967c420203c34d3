# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML manifest describing a toolchain and the SDK modules to compile.

Example::

    toolchain:
      compiler: /usr/bin/swiftc
      sdk-path: /Applications/Xcode.app/.../iPhoneOS.sdk
      resource-dir: /usr/lib/swift
      target: arm64-apple-ios15.0
      compiler-flags: [-Onone]
    output-root: pcm
    modules:
      - name: Darwin
        modulemap: $SDKROOT/usr/include/module.modulemap
      - name: Foundation
        framework: true
        modulemap: $SDKROOT/System/Library/Frameworks/Foundation.framework/Modules/module.modulemap
        deps: [Darwin]
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from sdkpcm.compiler.command import shared_pcm_compilation_args
from sdkpcm.model.modules import DEFAULT_PCH_VALIDATION_FLAGS, ToolchainContext, UncompiledSdkModuleInfo

# ###############
# Public Interface
# ###############


class ManifestError(Exception):
    """Raised when a manifest cannot be read or is invalid."""


class ManifestToolchain(BaseModel):
    """The ``toolchain`` section of a manifest."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    compiler: str
    sdk_path: str = Field(alias="sdk-path")
    resource_dir: str | None = Field(alias="resource-dir", default=None)
    target: str
    compiler_flags: list[str] = Field(alias="compiler-flags", default_factory=list)
    pch_validation_flags: list[str] = Field(
        alias="pch-validation-flags",
        default_factory=lambda: list(DEFAULT_PCH_VALIDATION_FLAGS),
    )

    def to_context(self) -> ToolchainContext:
        return ToolchainContext(
            compiler=self.compiler,
            sdk_path=self.sdk_path,
            resource_dir=self.resource_dir,
            compiler_flags=tuple(self.compiler_flags),
            target=self.target,
            pch_validation_flags=tuple(self.pch_validation_flags),
        )


class ManifestModule(BaseModel):
    """One entry of the ``modules`` list."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    module_name: str | None = Field(alias="module-name", default=None)
    framework: bool = False
    modulemap: str
    extra_flags: list[str] = Field(alias="extra-flags", default_factory=list)
    deps: list[str] = Field(default_factory=list)

    @property
    def effective_module_name(self) -> str:
        return self.module_name or self.name

    def to_uncompiled(self, toolchain: ToolchainContext) -> UncompiledSdkModuleInfo:
        """Build the uncompiled module, prefixing the shared PCM arguments."""
        module_name = self.effective_module_name
        partial_cmd = shared_pcm_compilation_args(toolchain.target, module_name, toolchain.pch_validation_flags)
        return UncompiledSdkModuleInfo(
            name=self.name,
            module_name=module_name,
            is_framework=self.framework,
            input_relative_path=self.modulemap,
            partial_cmd=partial_cmd + tuple(self.extra_flags),
        )


class Manifest(BaseModel):
    """Top-level manifest model."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    toolchain: ManifestToolchain
    output_root: str = Field(alias="output-root", default="")
    modules: list[ManifestModule] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_module_names(self) -> Manifest:
        seen: set[str] = set()
        for module in self.modules:
            if module.name in seen:
                raise ValueError(f"duplicate module name '{module.name}'")
            seen.add(module.name)
        return self


def load_manifest(path: Path) -> Manifest:
    """Load and validate a manifest file.

    Raises:
        ManifestError: If the file cannot be read, is not valid YAML, or does
            not match the manifest schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ManifestError(f"Manifest file not found: {path}") from None
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest '{path}': {exc}") from exc
    return parse_manifest(text, source_label=str(path))


def parse_manifest(text: str, source_label: str = "<string>") -> Manifest:
    """Parse manifest YAML text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"{source_label}: manifest must be a YAML mapping")

    try:
        return Manifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(f"Invalid manifest {source_label}: {exc}") from exc
