#!/usr/bin/env python3
"""
uubu CLI

Command-line entry point: picks the display language, parses flags and
runs the update pipeline.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .config import RunConfig
from .console import Console
from .exceptions import CatalogError
from .i18n import MessageCatalog, detect_language, load_catalog
from .logging_config import setup_logging
from .orchestrator import Orchestrator, build_pipeline
from .runner import CommandRunner, SubprocessRunner
from .screens import help_text, version_text
from .steps import StepContext

logger = logging.getLogger(__name__)

PROG = "uubu"


def build_parser(catalog: MessageCatalog) -> argparse.ArgumentParser:
    """Build the argument parser; -h and -v render the localized screens."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=catalog.get("help_description"),
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true",
                        help=catalog.get("flag_help"))
    parser.add_argument("-v", "--version", action="store_true",
                        help=catalog.get("flag_version"))
    parser.add_argument("-s", "--snapshot", action="store_true",
                        help=catalog.get("flag_snapshot"))
    parser.add_argument("--no-snap", action="store_true",
                        help=catalog.get("flag_no_snap"))
    parser.add_argument("--no-flatpak", action="store_true",
                        help=catalog.get("flag_no_flatpak"))
    parser.add_argument("--no-reboot", action="store_true",
                        help=catalog.get("flag_no_reboot"))
    parser.add_argument("--dist-upgrade", action="store_true",
                        help=catalog.get("flag_dist_upgrade"))
    parser.add_argument("--verbose", action="store_true",
                        help=catalog.get("flag_verbose"))
    parser.add_argument("--log-file", type=Path, metavar="PATH",
                        help=catalog.get("flag_log_file"))
    return parser


def main(
    argv: Optional[List[str]] = None,
    runner: Optional[CommandRunner] = None,
    stdin: Optional[TextIO] = None,
) -> int:
    """Main entry point."""
    language = detect_language()
    try:
        catalog = load_catalog(language)
    except CatalogError as e:
        print(f"{PROG}: error: {e}", file=sys.stderr)
        return 1

    parser = build_parser(catalog)
    args = parser.parse_args(argv)

    if args.help:
        sys.stdout.write(help_text(catalog, PROG))
        return 0

    if args.version:
        sys.stdout.write(version_text(catalog, PROG))
        return 0

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )
    logger.debug(f"Language: {catalog.language}")

    config = RunConfig.from_args(args)
    logger.debug(f"Run configuration: {config}")

    context = StepContext(
        console=Console(catalog),
        runner=runner or SubprocessRunner(),
    )
    orchestrator = Orchestrator(context, build_pipeline(context, stdin=stdin))

    try:
        return orchestrator.run(config)
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        return 130


if __name__ == "__main__":
    sys.exit(main())
