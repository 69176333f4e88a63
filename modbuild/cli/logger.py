#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/logger.py - Logging management for the command line tools
#

import sys

from rich.console import Console


class RichLogger:
    """Writes diagnostics to stderr using the Rich library.

    Regular messages are only shown in verbose mode; errors always are.
    stdout is left alone for the rendered output.
    """

    color_map = {
        "cyan": "bright_cyan",
        "blue": "blue",
        "light_blue": "cyan",
        "white": "white",
        "red": "red",
        "yellow": "yellow",
        "green": "green",
        "purple": "magenta",
        "bold": "bold",
    }

    def __init__(self, use_colors: bool = True, verbose: bool = False, console: Console = None):
        self.use_colors = use_colors
        self.verbose = verbose
        self.console = console or Console(stderr=True, highlight=False, no_color=not use_colors)

    def _print(self, style: str, message: str):
        rich_style = self.color_map.get(style, "white") if self.use_colors else None
        # soft_wrap keeps each message on a single line
        self.console.print(message, style=rich_style, markup=False, soft_wrap=True)

    def log(self, style: str, message: str):
        """Displays a formatted message in verbose mode"""
        if self.verbose:
            self._print(style, message)

    def die(self, style: str, message: str, exit_code: int = 1):
        """Displays error message and exits the program"""
        self._print(style, message)
        sys.exit(exit_code)
