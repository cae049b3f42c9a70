#!/usr/bin/env python3
"""Main reporter for LVM topology"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from analyzers.lvm.sources import BlockDevices, LvmQuery, Runner
from analyzers.lvm.topology import TopologyAnalyzer
from analyzers.system.system_info import get_execution_timestamp, get_hostname
from reporting.report_generator import (
    create_environment,
    prepare_report_data,
    render_report,
)
from utils.command_runner import REQUIRED_COMMANDS, require_commands, run_command
from utils.logger import Logger


DEFAULT_OUTPUT = 'peepdrive.txt'


@dataclass
class ReportOptions:
    output_path: str = DEFAULT_OUTPUT
    vg_filter: Optional[str] = None
    human: bool = False
    debug: bool = False

    @classmethod
    def from_environment(cls, **overrides):
        """Defaults from PEEPDRIVE_* variables, overridden by explicit values"""
        options = cls(
            output_path=os.environ.get('PEEPDRIVE_OUTPUT', DEFAULT_OUTPUT),
            debug=os.environ.get('PEEPDRIVE_DEBUG', '').lower() in ('1', 'true', 'yes'),
        )
        for key, value in overrides.items():
            if value is not None:
                setattr(options, key, value)
        return options


class TopologyReporter:
    """Generates the read-only LVM topology report"""

    def __init__(self, output_path, vg_filter: Optional[str] = None,
                 runner: Runner = run_command,
                 clock: Callable[[], str] = get_execution_timestamp,
                 hostname: Optional[str] = None):
        Logger.debug(f"Initializing TopologyReporter with output_path: {output_path}")
        self.output_path = Path(output_path)
        self.vg_filter = vg_filter or None
        self.clock = clock
        self.hostname = hostname
        self.analyzer = TopologyAnalyzer(
            LvmQuery(runner),
            BlockDevices(runner),
            clock=clock,
        )
        self.env = create_environment()

    def generate_report(self) -> int:
        """
        Query LVM, render the report and write it to the output path.

        Per-VG and per-PV lookups that fail end up as placeholders in the
        report; only a failure to write the output file raises.

        Returns:
            Number of lines written
        """
        Logger.debug("Starting report generation.")
        execution_timestamp = self.clock()
        hostname = self.hostname or get_hostname()

        sections = self.analyzer.analyze(self.vg_filter)
        if not sections:
            Logger.debug("No volume groups found or accessible.")

        report_data = prepare_report_data(
            hostname=hostname,
            execution_timestamp=execution_timestamp,
            volume_groups=sections,
        )

        Logger.debug("Rendering text report from template.")
        content = render_report(report_data, self.env)

        Logger.debug(f"Writing report to: {self.output_path}")
        with open(self.output_path, 'w', encoding='utf-8') as f:
            f.write(content)

        lines = len(content.splitlines())
        Logger.debug(f"Report generation complete ({lines} lines).")
        return lines


def run_report(options: ReportOptions, runner: Optional[Runner] = None,
               check_commands: bool = True) -> int:
    """
    Run the LVM topology report.

    Args:
        options: Output path, VG filter and debug settings
        runner: Command runner used for every external query, defaults to
            running the real tools
        check_commands: Verify the LVM tools are installed before querying

    Returns:
        Number of lines written

    Raises:
        MissingCommandError: a required tool is not installed
        OSError: the report could not be written
    """
    if check_commands:
        require_commands(REQUIRED_COMMANDS)

    if options.debug:
        debug_file_path = f"{options.output_path}.debug.log"
        Logger.set_debug(True, debug_file_path)
        Logger.debug("Debug mode enabled for report")

    Logger.info("Generating read-only LVM report...")
    reporter = TopologyReporter(
        options.output_path,
        options.vg_filter,
        runner=runner or run_command,
    )
    lines = reporter.generate_report()
    Logger.info(f"Wrote read-only LVM report to: {options.output_path}")
    return lines
