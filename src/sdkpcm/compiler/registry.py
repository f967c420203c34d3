# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry of compiled SDK modules for a single build evaluation."""

from __future__ import annotations

import logging

from sdkpcm.model.modules import CompiledModuleInfo

_LOGGER = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class RegistryCollisionError(Exception):
    """Raised when a module name is registered twice in one build evaluation."""


class NotFoundError(KeyError):
    """Raised when a module name has not been registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ModuleRegistry:
    """Maps module names to their :class:`CompiledModuleInfo`.

    Entries are only ever added.  Create one registry per build evaluation and
    pass it to every compile request of that evaluation.
    """

    def __init__(self) -> None:
        self._modules: dict[str, CompiledModuleInfo] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def set(self, name: str, info: CompiledModuleInfo) -> None:
        """Register *info* under *name*.

        Raises:
            RegistryCollisionError: If *name* is already registered.
        """
        if name in self._modules:
            raise RegistryCollisionError(f"SDK module '{name}' is already registered in this build")
        self._modules[name] = info
        _LOGGER.debug("Registered SDK module %s -> %s", name, info.output_artifact.path)

    def get(self, name: str) -> CompiledModuleInfo:
        """Return the compiled module registered under *name*.

        Raises:
            NotFoundError: If *name* is not registered.
        """
        try:
            return self._modules[name]
        except KeyError:
            raise NotFoundError(f"SDK module '{name}' is not registered") from None

    def names(self) -> list[str]:
        return sorted(self._modules)
