#!/usr/bin/env python3
"""
Read-only LVM and block device queries

Wraps vgs, pvs, lvs, vgcfgbackup and lsblk. Every query goes through an
injectable runner returning (rc, stdout, stderr), so the topology code never
sees raw tool output, only parsed records.
"""

import os
import re
from typing import Callable, List, Optional, Tuple

from analyzers.lvm.records import (
    FIELD_SEPARATOR,
    LogicalVolume,
    VolumeGroup,
    parse_report_rows,
)
from utils.command_runner import run_command
from utils.logger import Logger


Runner = Callable[[List[str]], Tuple[int, str, str]]

REPORT_OPTIONS = ['--noheadings', '--units', 'b', '--separator', FIELD_SEPARATOR]

VG_FIELDS = ['vg_name', 'vg_uuid', 'vg_size']
PV_FIELDS = ['pv_name', 'vg_name']
PV_UUID_FIELDS = ['pv_uuid']
LV_FIELDS = ['lv_name', 'lv_uuid', 'lv_size', 'vg_name', 'devices']

# Device hints inside a physical_volumes { pvN { ... } } metadata block
METADATA_DEVICE_RE = re.compile(r'\bdevice\s*=\s*"([^"]*)"')


def report_command(tool: str, fields: List[str], select: Optional[str] = None) -> List[str]:
    """Build a vgs/pvs/lvs command line producing separator-delimited rows"""
    args = [tool] + REPORT_OPTIONS + ['-o', ','.join(fields)]
    if select:
        args += ['--select', select]
    return args


def parse_metadata_devices(metadata: str) -> List[str]:
    """Extract PV device paths in the order they appear in VG metadata text"""
    devices = []
    if not metadata:
        return devices

    for line in metadata.splitlines():
        match = METADATA_DEVICE_RE.search(line)
        if match and match.group(1).strip():
            devices.append(match.group(1).strip())

    return devices


class LvmQuery:
    """Structured access to LVM metadata through the LVM command line tools"""

    def __init__(self, runner: Runner = run_command):
        self.runner = runner

    def _rows(self, tool: str, fields: List[str], select: Optional[str] = None):
        rc, out, _ = self.runner(report_command(tool, fields, select))
        # LVM exits non-zero when any VG is unhappy; rows it did print still count
        if rc != 0:
            Logger.debug(f"{tool} exited with {rc}, keeping {len(out.splitlines())} output line(s)")
        return parse_report_rows(out, fields)

    def list_volume_groups(self, vg_filter: Optional[str] = None) -> List[VolumeGroup]:
        """List all VGs, or only the one named by vg_filter, in tool order"""
        select = f"vg_name={vg_filter}" if vg_filter else None
        return [
            VolumeGroup(name=row['vg_name'], uuid=row['vg_uuid'], size=row['vg_size'])
            for row in self._rows('vgs', VG_FIELDS, select)
            if row['vg_name']
        ]

    def list_physical_volumes(self) -> List[dict]:
        """All PV rows (pv_name, vg_name) in the order pvs returns them"""
        return self._rows('pvs', PV_FIELDS)

    def pv_uuid(self, pv_name: str) -> str:
        """UUID of one PV by exact name, empty when it cannot be read"""
        rows = self._rows('pvs', PV_UUID_FIELDS, f"pv_name={pv_name}")
        if not rows:
            return ''
        return rows[0]['pv_uuid']

    def list_logical_volumes(self, vg_name: str) -> List[LogicalVolume]:
        """
        LVs belonging to vg_name, in the order lvs returns them.

        lvs prints one row per segment when the devices field is requested,
        so rows of the same LV are merged and their device strings collected.
        """
        volumes = {}
        for row in self._rows('lvs', LV_FIELDS):
            if row['vg_name'] != vg_name.strip() or not row['lv_name']:
                continue
            lv = volumes.get(row['lv_name'])
            if lv is None:
                lv = LogicalVolume(
                    name=row['lv_name'],
                    uuid=row['lv_uuid'],
                    size=row['lv_size'],
                    vg_name=row['vg_name'],
                )
                volumes[lv.name] = lv
            if row['devices'] and row['devices'] not in lv.devices:
                lv.devices.append(row['devices'])
        return list(volumes.values())

    def metadata_devices(self, vg_name: str) -> List[str]:
        """PV device paths from the VG metadata, as recorded by LVM"""
        rc, out, _ = self.runner(['vgcfgbackup', '-f', '-', vg_name])
        if rc != 0:
            return []
        return parse_metadata_devices(out)


class BlockDevices:
    """Canonical path and byte size lookups for block devices"""

    def __init__(self, runner: Runner = run_command):
        self.runner = runner

    def canonical_path(self, path: str) -> str:
        """Resolve symlinks; the raw path is returned if that fails"""
        try:
            return os.path.realpath(path)
        except (OSError, ValueError) as e:
            Logger.debug(f"Could not resolve {path}: {e}")
            return path

    def size_bytes(self, path: str) -> str:
        """Device size as reported by lsblk, "0" on any failure"""
        rc, out, _ = self.runner(['lsblk', '-b', '-ndo', 'SIZE', '--paths', path])
        if rc != 0:
            return '0'
        lines = [line.strip() for line in out.splitlines() if line.strip()]
        return lines[0] if lines else '0'
