#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/errors.py - Exceptions raised by the core modules
#


class ModBuildError(Exception):
    """Base class for errors reported to the user"""


class MalformedStructuredFile(ModBuildError):
    """A structured version file exists but cannot be parsed"""

    def __init__(self, path, reason):
        super().__init__(f"malformed structured file '{path}': {reason}")
        self.path = path
        self.reason = reason


class ResolutionError(ModBuildError):
    """No source produced a value for a required version axis"""


class TemplateEvaluationError(ModBuildError):
    """A template expression could not be evaluated"""


class ChangelogError(ModBuildError):
    """The changelog could not be filtered as requested"""
