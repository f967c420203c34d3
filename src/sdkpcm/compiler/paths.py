# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Expansion of SDK-relative paths and derivation of module search roots.

Module map paths are stored relative to a root that is only known per
toolchain.  Two prefix tokens select the root explicitly:

* ``$SDKROOT/...``: relative to the SDK root.
* ``$RESOURCEDIR/...``: relative to the compiler resource directory.

A path without a token is relative to the SDK root.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath

# ###############
# Public Interface
# ###############

SDKROOT_TOKEN = "$SDKROOT"
RESOURCEDIR_TOKEN = "$RESOURCEDIR"

# Components stripped from a module map path to reach its search root.
# Frameworks are laid out as ``<Name>.framework/Modules/module.modulemap`` and
# are found by searching the directory that contains the bundle.
FRAMEWORK_STRIP_COUNT = 3
MODULE_STRIP_COUNT = 1


class ConfigurationError(Exception):
    """Raised when a path refers to a toolchain location that is not configured."""


class StructuralPathError(Exception):
    """Raised when a module map path does not have the layout its module kind requires."""


class SearchPathKind(Enum):
    """Kind of search path added for a module, with its compiler flag."""

    INCLUDE = "-I"
    FRAMEWORK = "-F"

    @property
    def flag(self) -> str:
        return self.value


def expand_sdk_path(sdk_path: str, resource_dir: str | None, relative_path: str) -> PurePosixPath:
    """Expand a possibly token-prefixed SDK path into a concrete path.

    Args:
        sdk_path: The SDK root.
        resource_dir: The compiler resource directory, or ``None``.
        relative_path: Path relative to the SDK root, or prefixed with
            ``$SDKROOT`` or ``$RESOURCEDIR``.

    Returns:
        The expanded path.

    Raises:
        ConfigurationError: If *relative_path* uses ``$RESOURCEDIR`` but no
            resource directory is configured (``None`` or empty).
        StructuralPathError: If the part below the root is absolute, which
            would escape the SDK or resource directory.
    """
    token, rest = _split_token(relative_path)
    if rest.startswith("/"):
        raise StructuralPathError(
            f"SDK path '{relative_path}' is absolute; use a path relative to the SDK root "
            f"or prefixed with {SDKROOT_TOKEN} or {RESOURCEDIR_TOKEN}"
        )
    if token == RESOURCEDIR_TOKEN:
        if not resource_dir:
            raise ConfigurationError(
                f"Path '{relative_path}' is relative to the compiler resource directory, "
                "but the toolchain has no resource directory configured"
            )
        root = resource_dir
    else:
        root = sdk_path
    return PurePosixPath(root) / rest if rest else PurePosixPath(root)


def resolve_search_path(relative_path: str, is_framework: bool) -> tuple[SearchPathKind, str]:
    """Derive the search root for a module from its module map path.

    The returned root is still unexpanded and may keep its prefix token.

    Raises:
        StructuralPathError: If *relative_path* has too few components, or a
            framework module map is not at ``<Name>.framework/Modules/<file>``.
    """
    components = relative_path.split("/")
    if is_framework:
        _check_framework_layout(relative_path, components)
        kind, count = SearchPathKind.FRAMEWORK, FRAMEWORK_STRIP_COUNT
    else:
        kind, count = SearchPathKind.INCLUDE, MODULE_STRIP_COUNT
    if len(components) < count:
        raise StructuralPathError(
            f"Module map path '{relative_path}' has {len(components)} component(s); "
            f"{'framework' if is_framework else 'non-framework'} modules need at least {count}"
        )
    return kind, "/".join(components[:-count])


def search_path_args(
    sdk_path: str,
    resource_dir: str | None,
    relative_path: str,
    is_framework: bool,
) -> list[str]:
    """Return the ``-Xcc <flag> -Xcc <root>`` arguments for a module's search root."""
    kind, root = resolve_search_path(relative_path, is_framework)
    expanded = expand_sdk_path(sdk_path, resource_dir, root)
    return ["-Xcc", kind.flag, "-Xcc", str(expanded)]


# ################
# Implementation
# ################


def _split_token(path: str) -> tuple[str | None, str]:
    """Split a leading prefix token off *path*, dropping the separator after it."""
    for token in (RESOURCEDIR_TOKEN, SDKROOT_TOKEN):
        if path == token:
            return token, ""
        if path.startswith(token + "/"):
            return token, path[len(token) + 1 :]
    return None, path


def _check_framework_layout(relative_path: str, components: list[str]) -> None:
    if len(components) < FRAMEWORK_STRIP_COUNT:
        return
    bundle, modules_dir = components[-3], components[-2]
    if not bundle.endswith(".framework") or modules_dir != "Modules":
        raise StructuralPathError(
            f"Framework module map '{relative_path}' is not laid out as "
            "'<Name>.framework/Modules/<modulemap>'; this SDK layout is not supported"
        )
