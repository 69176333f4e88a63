#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/changelog.py - Release section extraction from Markdown changelogs
#

from collections import namedtuple
from typing import List

from .config import CHANGELOG_HEADING
from .errors import ChangelogError
from .translation_utils import _

ChangelogSection = namedtuple("ChangelogSection", ["version", "lines"])


class ChangelogExtractor:
    """Splits a changelog at release headings and returns selected releases.

    Releases are expected newest first, each starting with a heading such
    as "### v1.1.0". Text before the first release heading is ignored.
    """

    def __init__(self, heading: str = CHANGELOG_HEADING):
        self.prefix = heading.rstrip() + " "

    def sections(self, text: str) -> List[ChangelogSection]:
        sections = []
        for line in text.splitlines():
            if line.startswith(self.prefix):
                sections.append(ChangelogSection(line[len(self.prefix):].strip(), [line]))
            elif sections:
                sections[-1].lines.append(line)
        return sections

    def single_version(self, text: str, version: str) -> str:
        """Returns the section of *version* only"""
        sections = self._sections_or_die(text)
        index = self._index_of(sections, version)
        return self._join(sections[index:index + 1])

    def upto_version(self, text: str, version: str) -> str:
        """Returns the section of *version* and every older one"""
        sections = self._sections_or_die(text)
        index = self._index_of(sections, version)
        return self._join(sections[index:])

    def _sections_or_die(self, text):
        if not text or not text.strip():
            raise ChangelogError(_("changelog is empty"))
        sections = self.sections(text)
        if not sections:
            raise ChangelogError(_("no release headings found in changelog"))
        return sections

    @staticmethod
    def _index_of(sections, version):
        for index, section in enumerate(sections):
            if section.version == version:
                return index
        raise ChangelogError(_("version not found in changelog: '{0}'").format(version))

    @staticmethod
    def _join(sections):
        blocks = []
        for section in sections:
            lines = list(section.lines)
            while lines and not lines[-1].strip():
                lines.pop()
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks) + "\n"
