#!/usr/bin/env python3
"""External command execution for the read-only LVM queries"""

import os
import shutil
import subprocess
from typing import Iterable, List, Sequence, Tuple
from utils.logger import Logger


# Every tool the report needs. vgcfgbackup is only ever run with "-f -",
# which prints the metadata instead of writing a backup file.
REQUIRED_COMMANDS = ('vgs', 'pvs', 'lvs', 'vgcfgbackup', 'lsblk')

# Keep tool output stable regardless of the operator's locale
C_LOCALE = {'LANG': 'C', 'LC_ALL': 'C', 'LC_MESSAGES': 'C', 'LC_CTYPE': 'C'}


class MissingCommandError(Exception):
    """Raised when a required external query tool is not installed"""

    def __init__(self, commands: Sequence[str]):
        self.commands = list(commands)
        super().__init__(
            "Required command not found: " + ", ".join(self.commands)
        )


def run_command(args: Sequence[str]) -> Tuple[int, str, str]:
    """
    Run a single external query and capture its output.

    Never raises on failure: a non-zero exit status is returned as-is and a
    command that cannot be started is reported with rc 127.

    Returns:
        Tuple of (returncode, stdout, stderr)
    """
    Logger.debug(f"Running: {' '.join(args)}")
    env = dict(os.environ)
    env.update(C_LOCALE)
    try:
        result = subprocess.run(
            list(args),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            env=env,
            check=False,
        )
    except OSError as e:
        Logger.debug(f"Failed to run {args[0]}: {e}")
        return 127, '', str(e)

    stdout = result.stdout.decode('utf-8', errors='replace')
    stderr = result.stderr.decode('utf-8', errors='replace')
    if result.returncode != 0:
        Logger.debug(f"{args[0]} exited with {result.returncode}: {stderr.strip()}")
    return result.returncode, stdout, stderr


def missing_commands(commands: Iterable[str] = REQUIRED_COMMANDS) -> List[str]:
    """Return the commands that cannot be found on PATH, in order"""
    return [cmd for cmd in commands if shutil.which(cmd) is None]


def require_commands(commands: Iterable[str] = REQUIRED_COMMANDS):
    """Fail with MissingCommandError unless every command is available"""
    missing = missing_commands(commands)
    if missing:
        raise MissingCommandError(missing)
