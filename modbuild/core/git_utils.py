#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/git_utils.py - Git repository utilities
#

import re
from collections import namedtuple
from typing import Optional

from .config import GIT_DESCRIBE_LONG
from .sources import Source
from .translation_utils import _

GitDescription = namedtuple("GitDescription", ["tag", "commits_since_tag", "revision"])

# Output of `git describe --tags --long`, e.g. v1.2.3-4-gabc1234
_DESCRIBE_LONG = re.compile(r'^(?P<tag>.+)-(?P<count>\d+)-g(?P<revision>[0-9a-fA-F]+)$')


class GitUtils:
    """Utilities for reading version information from Git"""

    @staticmethod
    def parse_describe(output: Optional[str]) -> Optional[GitDescription]:
        """Splits `git describe --tags --long` output into its parts"""
        if not output:
            return None
        match = _DESCRIBE_LONG.match(output.strip())
        if not match:
            return None
        return GitDescription(match.group('tag'), int(match.group('count')), match.group('revision'))

    @staticmethod
    def strip_tag_prefix(tag: str) -> str:
        """Removes the conventional 'v' in front of release tags"""
        if len(tag) > 1 and tag[0] in "vV" and tag[1].isdigit():
            return tag[1:]
        return tag

    @staticmethod
    def version_from_describe(output: Optional[str]) -> Optional[str]:
        """Derives a mod version from the nearest tag and the commits since it.

        At the tag the version is the tag itself, otherwise the commit count
        is appended as an extra component: v1.2.3 + 1 commit -> 1.2.3.1
        """
        description = GitUtils.parse_describe(output)
        if description is None:
            return None

        version = GitUtils.strip_tag_prefix(description.tag)
        if description.commits_since_tag:
            version = f"{version}.{description.commits_since_tag}"
        return version


class GitDescribeSource(Source):
    """Mod version derived from the nearest Git tag of the working tree"""

    def __init__(self, argv=None):
        self.argv = list(argv or GIT_DESCRIBE_LONG)
        self.description = _("git tags")

    def read(self, resolver):
        return GitUtils.version_from_describe(resolver.run_command(self.argv))
