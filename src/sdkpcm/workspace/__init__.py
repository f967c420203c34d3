# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Manifest configuration for sdkpcm."""

from sdkpcm.workspace.manifest import (
    Manifest,
    ManifestError,
    ManifestModule,
    ManifestToolchain,
    load_manifest,
    parse_manifest,
)

__all__ = [
    "Manifest",
    "ManifestError",
    "ManifestModule",
    "ManifestToolchain",
    "load_manifest",
    "parse_manifest",
]
