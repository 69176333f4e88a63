#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/changelog_cli.py - Entry point for the extract-changelog tool
#

import argparse
import sys

from modbuild.cli.logger import RichLogger
from modbuild.core.changelog import ChangelogExtractor
from modbuild.core.config import APP_VERSION
from modbuild.core.errors import ChangelogError, ModBuildError
from modbuild.core.translation_utils import _

PROG = "extract-changelog"


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=_("Prints release sections of a Markdown changelog."),
    )
    parser.add_argument("--version", action="version", version=APP_VERSION, help=_("print the version"))
    parser.add_argument("-u", "--upto-version", metavar="VERSION",
                        help=_("print this release and every older one"))
    parser.add_argument("-s", "--single-version", metavar="VERSION", help=_("print this release only"))
    parser.add_argument("-i", "--in-file", help=_("read the changelog from this file instead of stdin"))
    parser.add_argument("-o", "--out-file", help=_("write to this file instead of stdout"))
    parser.add_argument("-v", "--verbose", action="store_true", help=_("verbose logging"))
    return parser.parse_args(argv)


def extract(args, logger) -> str:
    if bool(args.upto_version) == bool(args.single_version):
        raise ChangelogError(_("exactly one of --upto-version and --single-version is required"))

    if args.in_file:
        logger.log("white", _("Reading changelog from {0}").format(args.in_file))
        try:
            with open(args.in_file, 'r', encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            raise ChangelogError(_("cannot read '{0}': {1}").format(args.in_file, e.strerror)) from e
    else:
        text = sys.stdin.read()

    extractor = ChangelogExtractor()
    if args.single_version:
        return extractor.single_version(text, args.single_version)
    return extractor.upto_version(text, args.upto_version)


def main(argv=None):
    """Main entry point of extract-changelog"""
    args = parse_arguments(argv)
    logger = RichLogger(use_colors=sys.stderr.isatty(), verbose=args.verbose)

    try:
        output = extract(args, logger)
        if args.out_file:
            logger.log("white", _("Writing changelog to {0}").format(args.out_file))
            with open(args.out_file, 'w', encoding='utf-8') as f:
                f.write(output)
        else:
            sys.stdout.write(output)
    except ModBuildError as e:
        logger.die("red", str(e))
    except KeyboardInterrupt:
        logger.die("yellow", _("Operation cancelled by user."))


if __name__ == "__main__":
    main()
