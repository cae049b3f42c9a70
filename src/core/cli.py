#!/usr/bin/env python3
"""Command line entry point for peepdrive"""

import argparse
import sys

from __version__ import __version__
from core.analyzer import DEFAULT_OUTPUT, ReportOptions, run_report
from utils.command_runner import MissingCommandError
from utils.logger import Logger


EXIT_OK = 0
EXIT_WRITE_FAILED = 1
EXIT_USAGE = 2
EXIT_MISSING_COMMAND = 3

EPILOG = """\
Note: This tool is strictly read-only. It will not change any LVM or
device state. Some queries may require root privileges to read device
attributes; re-run with sudo if permission errors occur.

PVs are listed in the order recorded in the VG metadata. When that
metadata cannot be read, the order reported by pvs is used instead and
is not guaranteed to reflect the original VG layout.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='peepdrive',
        description='Write a read-only report of LVM volume groups, their '
                    'physical volumes and logical volumes.',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument('--vg', metavar='VGNAME',
                        help='Only report on the specified volume group')
    parser.add_argument('--output', metavar='FILE',
                        help=f'Path to output report (default: {DEFAULT_OUTPUT})')
    parser.add_argument('--human', action='store_true', default=None,
                        help='Accepted for compatibility; sizes are always shown in GiB')
    parser.add_argument('--debug', action='store_true', default=None,
                        help='Write a debug log next to the report')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    options = ReportOptions.from_environment(
        output_path=args.output,
        vg_filter=args.vg,
        human=args.human,
        debug=args.debug,
    )

    try:
        run_report(options)
    except MissingCommandError as e:
        print(str(e), file=sys.stderr)
        return EXIT_MISSING_COMMAND
    except OSError as e:
        Logger.error(f"Failed to write report to {options.output_path}: {e}")
        return EXIT_WRITE_FAILED

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
