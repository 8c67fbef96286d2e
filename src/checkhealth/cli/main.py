#!/usr/bin/env python3
"""checkhealth command line host

Runs discovered healthchecks and prints the report.

Usage:
    checkhealth                    Run every discovered healthcheck
    checkhealth foo bar            Run the "foo" and "bar" healthchecks
    checkhealth vim*               Run "vim" and all of its submodules
    checkhealth --list             List discoverable healthcheck names
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..__version__ import __version__
from ..core.catalog import CheckCatalog
from ..core.runner import Runner
from ..utils.console import get_console, print_names, print_report
from ..utils.env_config import get_config, get_config_bool, get_search_path, load_env_file
from ..utils.logging_config import DEBUG_FORMAT, SIMPLE_FORMAT, parse_level, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='checkhealth',
        description='Run plugin healthchecks and print a unified report',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                     Run all healthchecks
  %(prog)s foo bar             Run the foo and bar healthchecks
  %(prog)s vim.lsp vim*        Dotted submodules, '*' matches any suffix
  %(prog)s --list              List discoverable healthchecks
  %(prog)s --json foo          Per-check tallies as JSON
  %(prog)s -r ./runtime foo    Add a search root

Environment:
  CHECKHEALTH_PATH             Extra search roots (os.pathsep separated)
  CHECKHEALTH_NO_DEFAULT_ROOTS Skip ~/.config/checkhealth and /usr/share/checkhealth
  DISABLE_EMOJI                Use ASCII status labels
  LOG_LEVEL                    Logging level (default WARNING)
        """
    )
    parser.add_argument('names', nargs='*', metavar='NAME',
                        help='Healthcheck name patterns (default: all)')
    parser.add_argument('-r', '--root', action='append', default=[], metavar='DIR',
                        help='Search root, may be repeated (highest priority first)')
    parser.add_argument('--no-default-roots', action='store_true',
                        help='Only search roots given with --root or CHECKHEALTH_PATH')
    parser.add_argument('--list', action='store_true',
                        help='List discoverable healthcheck names and exit')
    parser.add_argument('--ascii', action='store_true',
                        help='Use ASCII status labels instead of emoji')
    parser.add_argument('--json', action='store_true',
                        help='Print per-check tallies and report lines as JSON')
    parser.add_argument('-o', '--output', metavar='FILE',
                        help='Write the report to FILE instead of the terminal')
    parser.add_argument('--log-file', metavar='FILE',
                        help='Also write debug logs to FILE')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='More logging (-v info, -vv debug)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def _log_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return parse_level(get_config('LOG_LEVEL'))


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    load_env_file()

    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=_log_level(args.verbose),
        log_file=args.log_file or get_config('CHECKHEALTH_LOG_FILE') or None,
        log_format=DEBUG_FORMAT if args.verbose >= 2 else SIMPLE_FORMAT,
        force=True,
    )

    include_defaults = False if args.no_default_roots else None
    roots = get_search_path(args.root, include_defaults=include_defaults)
    logger.debug(f"Search roots: {roots}")

    catalog = CheckCatalog(roots)
    console = get_console()

    if args.list:
        print_names(catalog.complete(), console)
        return 0

    emoji = False if (args.ascii or get_config_bool('DISABLE_EMOJI')) else None
    runner = Runner(catalog=catalog, emoji=emoji)

    with console.status("Running healthchecks...") as status:
        runner.register_progress_callback(
            lambda name, current, total: status.update(
                f"Running healthcheck {name} ({current}/{total})..."
            )
        )
        report = runner.run(args.names)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    elif args.output:
        output = Path(args.output).expanduser()
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report.text + '\n', encoding='utf-8')
        logger.info(f"Report written to {output}")
    else:
        print_report(report.lines, console)

    return 1 if report.has_errors() else 0


if __name__ == '__main__':
    sys.exit(main())
