# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the compiled SDK module registry."""

import pytest

from sdkpcm.compiler import ModuleRegistry, NotFoundError, RegistryCollisionError, make_sdk_dependency_arena
from sdkpcm.model import CompiledModuleInfo, declare_pcm_output

# ###############
# Helpers
# ###############


def _info(name: str) -> CompiledModuleInfo:
    return CompiledModuleInfo(
        name=name,
        module_name=name,
        is_framework=True,
        output_artifact=declare_pcm_output(name),
        deps=make_sdk_dependency_arena().make(),
        input_relative_path=f"/SDK/{name}.framework/Modules/module.modulemap",
    )


# ###############
# Registry
# ###############


def test_independent_entries_are_retrievable() -> None:
    registry = ModuleRegistry()
    foundation = _info("Foundation")
    uikit = _info("UIKit")
    registry.set("Foundation", foundation)
    registry.set("UIKit", uikit)

    assert registry.get("Foundation") is foundation
    assert registry.get("UIKit") is uikit
    assert len(registry) == 2
    assert registry.names() == ["Foundation", "UIKit"]


def test_duplicate_registration_raises() -> None:
    registry = ModuleRegistry()
    registry.set("Foundation", _info("Foundation"))
    with pytest.raises(RegistryCollisionError, match="Foundation"):
        registry.set("Foundation", _info("Foundation"))


def test_duplicate_does_not_overwrite() -> None:
    registry = ModuleRegistry()
    first = _info("Foundation")
    registry.set("Foundation", first)
    with pytest.raises(RegistryCollisionError):
        registry.set("Foundation", _info("Foundation"))
    assert registry.get("Foundation") is first


def test_missing_entry_raises_not_found() -> None:
    registry = ModuleRegistry()
    with pytest.raises(NotFoundError, match="'UIKit' is not registered"):
        registry.get("UIKit")


def test_not_found_is_a_key_error() -> None:
    with pytest.raises(KeyError):
        ModuleRegistry().get("UIKit")


def test_contains() -> None:
    registry = ModuleRegistry()
    registry.set("Darwin", _info("Darwin"))
    assert "Darwin" in registry
    assert "UIKit" not in registry


def test_registries_are_independent() -> None:
    first = ModuleRegistry()
    first.set("Foundation", _info("Foundation"))
    second = ModuleRegistry()
    assert "Foundation" not in second
    second.set("Foundation", _info("Foundation"))
