#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/sources.py - Candidate sources for version values
#
# Copyright (c) 2025, modbuild contributors
# All rights reserved.
#

import json
import os
import subprocess
from typing import Iterable, Optional

from .errors import MalformedStructuredFile
from .translation_utils import _


def _clean(value) -> Optional[str]:
    """Return *value* as a stripped string, or None when it is empty."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class Source:
    """A place a version string may come from"""

    description = "source"

    def read(self, resolver: "SourceResolver") -> Optional[str]:
        raise NotImplementedError


class ExplicitSource(Source):
    """A value that was already supplied, e.g. by a command line flag"""

    def __init__(self, value: Optional[str], description: str = "explicit value"):
        self.value = value
        self.description = description

    def read(self, resolver):
        return _clean(self.value)


class EnvironmentSource(Source):
    def __init__(self, name: str):
        self.name = name
        self.description = _("environment variable {0}").format(name)

    def read(self, resolver):
        return _clean(resolver.environ.get(self.name))


class StructuredFileSource(Source):
    """A key of a JSON object file, looked up case-insensitively"""

    def __init__(self, path: str, key: str):
        self.path = path
        self.key = key
        self.description = _("key {0} of {1}").format(key, path)

    def read(self, resolver):
        data = resolver.load_structured(self.path)
        if not data:
            return None
        wanted = self.key.lower()
        for key, value in data.items():
            if key.lower() == wanted:
                if isinstance(value, (dict, list)):
                    return None
                return _clean(value)
        return None


class PlainFileSource(Source):
    def __init__(self, path: str):
        self.path = path
        self.description = _("file {0}").format(path)

    def read(self, resolver):
        path = resolver.path_for(self.path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return _clean(f.read())
        except (OSError, UnicodeDecodeError):
            return None


class CommandSource(Source):
    """Standard output of an external command"""

    def __init__(self, argv):
        self.argv = list(argv)
        self.description = _("command '{0}'").format(' '.join(self.argv))

    def read(self, resolver):
        return resolver.run_command(self.argv)


class SourceResolver:
    """Evaluates sources in order and returns the first non-empty value.

    A source that has nothing to offer is skipped silently. The one
    exception is a structured file that exists but cannot be parsed, which
    raises MalformedStructuredFile.
    """

    def __init__(self, cwd: Optional[str] = None, environ=None, logger=None):
        self.cwd = cwd
        self.environ = os.environ if environ is None else environ
        self.logger = logger
        self._structured_cache = {}

    def path_for(self, path: str) -> str:
        if self.cwd and not os.path.isabs(path):
            return os.path.join(self.cwd, path)
        return path

    def load_structured(self, path: str) -> Optional[dict]:
        """Parse a JSON object file once per resolver; None when it does not exist."""
        full_path = self.path_for(path)
        if full_path in self._structured_cache:
            return self._structured_cache[full_path]

        try:
            with open(full_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            data = None
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedStructuredFile(path, e) from e
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise MalformedStructuredFile(path, e) from e
            if not isinstance(data, dict):
                raise MalformedStructuredFile(path, _("top level is not an object"))

        self._structured_cache[full_path] = data
        return data

    def run_command(self, argv) -> Optional[str]:
        try:
            result = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                cwd=self.cwd,
                env=dict(self.environ),
                check=False
            )
        except (FileNotFoundError, PermissionError):
            return None

        if result.returncode != 0:
            return None
        return _clean(result.stdout)

    def resolve(self, sources: Iterable[Source]) -> Optional[str]:
        for source in sources:
            value = source.read(self)
            if value is not None:
                self._log("cyan", _("Using {0}: {1}").format(source.description, value))
                return value
            self._log("white", _("No value from {0}").format(source.description))
        return None

    def _log(self, style, message):
        if self.logger:
            self.logger.log(style, message)
