#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/translation_utils.py - Utilities for translation support
#
import gettext

# Configure the translation domain
gettext.textdomain("modbuild")

# Export _ directly as the translation function
_ = gettext.gettext
