# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the sdkpcm documentation."""

project = "sdkpcm"
author = "sdkpcm Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

autodoc_member_order = "bysource"

html_theme = "alabaster"
