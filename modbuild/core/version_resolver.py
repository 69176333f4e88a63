#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/version_resolver.py - Platform and mod version resolution
#
# Copyright (c) 2025, modbuild contributors
# All rights reserved.
#

from dataclasses import dataclass
from typing import Optional

from .config import (
    ENV_PACKAGE_VERSION, ENV_PLATFORM_VERSION, ENV_PLATFORM_VERSION_MAX, ENV_PLATFORM_VERSION_MIN,
    GIT_DESCRIBE, JSON_KEY_VERSION, JSON_KEY_VERSION_MAX, JSON_KEY_VERSION_MIN,
    PLATFORM_VERSION_FILE, PLATFORM_VERSION_JSON_FILE,
)
from .errors import ResolutionError
from .git_utils import GitDescribeSource
from .sources import (
    CommandSource, EnvironmentSource, ExplicitSource, PlainFileSource, SourceResolver, StructuredFileSource,
)
from .translation_utils import _
from .version import VersionValue

PLATFORM_VERSION_ERROR = "platform version not specified and no way to determine it"
PACKAGE_VERSION_ERROR = "package version not specified and no way to determine it"


@dataclass(frozen=True)
class ResolvedVersionSet:
    platform_version: VersionValue
    package_version: VersionValue
    platform_version_min: Optional[VersionValue] = None
    platform_version_max: Optional[VersionValue] = None
    repository_descriptor: Optional[str] = None

    def __post_init__(self):
        # The bounds fall back to the platform version itself
        if self.platform_version_min is None:
            object.__setattr__(self, "platform_version_min", self.platform_version)
        if self.platform_version_max is None:
            object.__setattr__(self, "platform_version_max", self.platform_version)


class VersionResolver:
    """Resolves the platform (game) and package (mod) versions of a build"""

    def __init__(self, cwd: Optional[str] = None, environ=None, logger=None):
        self.sources = SourceResolver(cwd=cwd, environ=environ, logger=logger)
        self.logger = logger

    def resolve_platform_version(self, explicit: Optional[str] = None) -> VersionValue:
        """Explicit value, then exact pins, then the maximum supported bound."""
        self._log(_("Resolving platform version"))
        value = self.sources.resolve([
            ExplicitSource(explicit, "--ksp-version"),
            EnvironmentSource(ENV_PLATFORM_VERSION),
            StructuredFileSource(PLATFORM_VERSION_JSON_FILE, JSON_KEY_VERSION),
            PlainFileSource(PLATFORM_VERSION_FILE),
            StructuredFileSource(PLATFORM_VERSION_JSON_FILE, JSON_KEY_VERSION_MAX),
            EnvironmentSource(ENV_PLATFORM_VERSION_MAX),
        ])
        if value is None:
            raise ResolutionError(_(PLATFORM_VERSION_ERROR))
        return VersionValue.parse(value)

    def resolve_platform_version_min(self, platform_version: VersionValue) -> VersionValue:
        self._log(_("Resolving minimum platform version"))
        value = self.sources.resolve([
            EnvironmentSource(ENV_PLATFORM_VERSION_MIN),
            StructuredFileSource(PLATFORM_VERSION_JSON_FILE, JSON_KEY_VERSION_MIN),
        ])
        return platform_version if value is None else VersionValue.parse(value)

    def resolve_platform_version_max(self, platform_version: VersionValue) -> VersionValue:
        self._log(_("Resolving maximum platform version"))
        value = self.sources.resolve([
            EnvironmentSource(ENV_PLATFORM_VERSION_MAX),
            StructuredFileSource(PLATFORM_VERSION_JSON_FILE, JSON_KEY_VERSION_MAX),
        ])
        return platform_version if value is None else VersionValue.parse(value)

    def resolve_package_version(self, explicit: Optional[str] = None) -> VersionValue:
        self._log(_("Resolving mod version"))
        value = self.sources.resolve([
            ExplicitSource(explicit, "--mod-version"),
            EnvironmentSource(ENV_PACKAGE_VERSION),
            GitDescribeSource(),
        ])
        if value is None:
            raise ResolutionError(_(PACKAGE_VERSION_ERROR))
        return VersionValue.parse(value)

    def resolve_repository_descriptor(self) -> Optional[str]:
        """Raw `git describe --tags` output, None outside a tagged Git tree"""
        self._log(_("Describing Git working tree"))
        return self.sources.resolve([CommandSource(GIT_DESCRIBE)])

    def resolve(self, platform_explicit: Optional[str] = None,
                package_explicit: Optional[str] = None) -> ResolvedVersionSet:
        platform_version = self.resolve_platform_version(platform_explicit)
        package_version = self.resolve_package_version(package_explicit)
        return ResolvedVersionSet(
            platform_version=platform_version,
            package_version=package_version,
            platform_version_min=self.resolve_platform_version_min(platform_version),
            platform_version_max=self.resolve_platform_version_max(platform_version),
            repository_descriptor=self.resolve_repository_descriptor(),
        )

    def _log(self, message):
        if self.logger:
            self.logger.log("blue", message)
