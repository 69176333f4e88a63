#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# modbuild/__init__.py - Package initialization
#

"""
Build helpers for packaging game mods.
Resolves platform and mod versions and fills them into text templates.
"""

from .core import __version__

__all__ = ["__version__"]
