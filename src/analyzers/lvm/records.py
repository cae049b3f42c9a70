#!/usr/bin/env python3
"""Record types for LVM topology data"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


# ASCII unit separator; never appears in device paths or LV names
FIELD_SEPARATOR = '\x1f'

# A device name inside an lvs "devices" value ends at "(", "," or whitespace
DEVICE_END = r"(?=[(,\s]|$)"


class PvOrderSource(Enum):
    """Where the PV order of a volume group came from"""
    AUTHORITATIVE = "metadata"
    FALLBACK = "pvs"
    UNRESOLVED = "none"


@dataclass
class VolumeGroup:
    name: str
    uuid: str
    size: str


@dataclass
class PhysicalVolume:
    name: str
    canonical: str
    uuid: str
    size: str
    vg_name: str


@dataclass
class LogicalVolume:
    name: str
    uuid: str
    size: str
    vg_name: str
    devices: List[str] = field(default_factory=list)

    def uses(self, pv_path: str) -> bool:
        """
        Check whether the LV occupies the given PV.

        A case-sensitive substring test against the device strings reported
        by lvs ("/dev/sda1(0)"), where the path has to end where the device
        name ends, so "/dev/sda" does not match "/dev/sda1(0)". The start of
        the path is not anchored and extents are not checked.
        """
        if not pv_path:
            return False
        pattern = re.compile(re.escape(pv_path) + DEVICE_END)
        return any(pattern.search(devices) for devices in self.devices)


@dataclass
class PvOrder:
    source: PvOrderSource
    devices: List[str] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.source is not PvOrderSource.UNRESOLVED and bool(self.devices)


def parse_report_rows(output: str, fields: List[str],
                      separator: str = FIELD_SEPARATOR) -> List[Dict[str, str]]:
    """
    Parse LVM report output into one dict per row.

    The LVM tools are called with --noheadings and a custom --separator, so
    every non-blank line is a row whose values line up with ``fields``.
    Values are stripped; fields missing from a short row are empty.
    """
    rows = []
    if not output:
        return rows

    for line in output.splitlines():
        if not line.strip():
            continue
        values = [value.strip() for value in line.split(separator)]
        values += [''] * (len(fields) - len(values))
        rows.append(dict(zip(fields, values)))

    return rows
