#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/fill_version.py - Main class of the fill-version tool
#
# Copyright (c) 2025, modbuild contributors
# All rights reserved.
#

import argparse
import io
import os
import sys

from rich.console import Console
from rich.text import Text

from .config import APP_VERSION
from .errors import ModBuildError
from .template import TemplateRenderer, build_context
from .translation_utils import _
from .version_resolver import VersionResolver

PROG = "fill-version"
USAGE = f"usage: {PROG} [in_erb_file] [out_file] [options]"

OPTIONS = [
    ("-h, --help", _("print help")),
    ("--version", _("print the version")),
    ("-k, --ksp-version [ksp version]", _("KSP version")),
    ("-m, --mod-version [mod version]", _("mod version")),
    ("-v, --verbose", _("verbose logging")),
]


def print_usage(console=None):
    """Prints usage and options to stderr"""
    console = console or Console(stderr=True, highlight=False)
    console.print(USAGE, markup=False)

    width = max(len(option) for option, _description in OPTIONS)
    for option, description in OPTIONS:
        line = Text("  ")
        line.append(option.ljust(width), style="green bold")
        line.append("  ")
        line.append(description, style="white")
        console.print(line, soft_wrap=True)


class UsageHelpAction(argparse.Action):
    """Help action that prints the usage to stderr"""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        print_usage()
        parser.exit()


class FillVersion:
    """Renders a version template with the resolved KSP and mod versions"""

    def __init__(self, argv=None, logger=None, cwd=None, environ=None):
        self.args = self.parse_arguments(argv)
        self.logger = logger
        self.cwd = cwd
        self.environ = environ

        if self.logger:
            self.logger.verbose = self.args.verbose

    def parse_arguments(self, argv=None) -> argparse.Namespace:
        """Parses command line arguments"""
        parser = argparse.ArgumentParser(prog=PROG, usage=USAGE[len("usage: "):], add_help=False)
        parser.add_argument("-h", "--help", action=UsageHelpAction, help=_("print help"))
        parser.add_argument("--version", action="version", version=APP_VERSION, help=_("print the version"))
        parser.add_argument("-k", "--ksp-version", dest="ksp_version", help=_("KSP version"))
        parser.add_argument("-m", "--mod-version", dest="mod_version", help=_("mod version"))
        parser.add_argument("-v", "--verbose", action="store_true", help=_("verbose logging"))
        parser.add_argument("files", nargs="*", metavar="file", help=_("input template and output file"))

        args = parser.parse_intermixed_args(argv)
        if len(args.files) > 2:
            console = Console(stderr=True, highlight=False)
            console.print(_("Error: Too many arguments"), markup=False)
            print_usage(console)
            sys.exit(1)

        args.in_file = args.files[0] if len(args.files) > 0 else None
        args.out_file = args.files[1] if len(args.files) > 1 else None
        return args

    def read_template(self) -> str:
        """Reads the template from the input file, or stdin without one"""
        in_file = self.args.in_file
        if in_file is None:
            self._log("white", _("Reading template from standard input"))
            buffer = getattr(sys.stdin, "buffer", None)
            if buffer is None:
                return sys.stdin.read()
            reader = io.TextIOWrapper(buffer, encoding="utf-8", newline="")
            try:
                return reader.read()
            finally:
                reader.detach()

        if not os.path.isfile(in_file):
            raise ModBuildError(_("file does not exist: '{0}'").format(in_file))

        self._log("white", _("Reading template from {0}").format(in_file))
        with open(in_file, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def write_output(self, text: str):
        out_file = self.args.out_file
        if out_file is None:
            sys.stdout.write(text)
            sys.stdout.flush()
            return

        self._log("white", _("Writing output to {0}").format(out_file))
        with open(out_file, 'w', encoding='utf-8', newline='') as f:
            f.write(text)

    def run(self):
        template_text = self.read_template()

        resolver = VersionResolver(cwd=self.cwd, environ=self.environ, logger=self.logger)
        resolved = resolver.resolve(self.args.ksp_version, self.args.mod_version)
        self._log("green", _("KSP version: {0}, mod version: {1}").format(
            resolved.platform_version, resolved.package_version
        ))

        # Render completely before writing anything
        output = TemplateRenderer().render(template_text, build_context(resolved))
        self.write_output(output)

    def _log(self, style, message):
        if self.logger:
            self.logger.log(style, message)
