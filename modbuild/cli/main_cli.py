#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/main_cli.py - Entry point for the fill-version tool
#

import sys

from modbuild.cli.logger import RichLogger
from modbuild.core.errors import ModBuildError
from modbuild.core.fill_version import FillVersion
from modbuild.core.translation_utils import _


def main(argv=None):
    """Main entry point of fill-version"""
    logger = RichLogger(use_colors=sys.stderr.isatty())

    try:
        FillVersion(argv, logger=logger).run()
    except ModBuildError as e:
        logger.die("red", str(e))
    except KeyboardInterrupt:
        logger.die("yellow", _("Operation cancelled by user."))


if __name__ == "__main__":
    main()
