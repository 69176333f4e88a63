#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/__init__.py - Core package initialization
#

"""
Core package for modbuild.
Contains the version resolution and template logic shared by the CLI tools.
"""

__version__ = "1.4.0"
__author__ = "modbuild contributors"
