#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/config.py - Configuration constants for modbuild
#
# Copyright (c) 2025, modbuild contributors
# All rights reserved.
#

from . import __version__

# Script version
APP_VERSION = __version__

# Environment variables consulted while resolving versions
ENV_PLATFORM_VERSION = "KSP_VERSION"
ENV_PLATFORM_VERSION_MIN = "KSP_VERSION_MIN"
ENV_PLATFORM_VERSION_MAX = "KSP_VERSION_MAX"
ENV_PACKAGE_VERSION = "MOD_VERSION"

# Version files, relative to the working directory
PLATFORM_VERSION_FILE = "KSP_VERSION"
PLATFORM_VERSION_JSON_FILE = "KSP_VERSION.json"

# Keys of the structured version file (matched case-insensitively)
JSON_KEY_VERSION = "KSP_VERSION"
JSON_KEY_VERSION_MIN = "KSP_VERSION_MIN"
JSON_KEY_VERSION_MAX = "KSP_VERSION_MAX"

# Git commands used to describe the working tree
GIT_DESCRIBE_LONG = ["git", "describe", "--tags", "--long"]
GIT_DESCRIBE = ["git", "describe", "--tags"]

# Changelog settings
CHANGELOG_HEADING = "###"
