#!/usr/bin/env python3
"""Report generation utilities for the LVM topology report"""

import re
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape


TEMPLATE_DIR = Path(__file__).parent / 'templates'
REPORT_TEMPLATE = 'report_template.txt'

GIB = 1024 ** 3
UNKNOWN = 'unknown'
NO_LVS = '(none)'


def to_gib(value: Any) -> str:
    """
    Convert a byte count to GiB with two decimals.

    Anything that is not a digit is dropped first, so LVM's "B" suffix is
    tolerated. Empty, missing or non-numeric input counts as 0 bytes.
    """
    digits = re.sub(r'[^0-9]', '', str(value)) if value is not None else ''
    # digit strings of any length, no float conversion
    size = Decimal(digits) if digits else Decimal(0)
    return f"{size / GIB:.2f} GiB"


def format_order_summary(paths: List[str]) -> str:
    """1: /dev/sda1, 2: /dev/sdb1, ..."""
    return ", ".join(f"{index}: {path}" for index, path in enumerate(paths, start=1))


def format_flow(vg_name: str, paths: List[str]) -> str:
    """vg0 -> /dev/sda1 -> /dev/sdb1"""
    return " -> ".join([vg_name] + list(paths))


def prepare_volume_group(section: Dict[str, Any]) -> Dict[str, Any]:
    """Turn a topology section into display values for the template"""
    physical_volumes = [
        {
            'index': pv['index'],
            'path': pv['path'],
            'canonical': pv['canonical'] or pv['path'],
            'uuid': pv['uuid'] or UNKNOWN,
            'size': to_gib(pv['size']),
            'lvs': ",".join(pv['lvs']) or NO_LVS,
        }
        for pv in section.get('physical_volumes', [])
    ]
    paths = [pv['path'] for pv in physical_volumes]

    return {
        'name': section['name'],
        'uuid': section.get('uuid', ''),
        'size': to_gib(section.get('size')),
        'report_time': section.get('report_time', ''),
        'physical_volumes': physical_volumes,
        'order_summary': format_order_summary(paths),
        'flow': format_flow(section['name'], paths),
        'logical_volumes': [
            {
                'name': lv['name'],
                'uuid': lv['uuid'] or UNKNOWN,
                'size': to_gib(lv['size']),
            }
            for lv in section.get('logical_volumes', [])
        ],
    }


def prepare_report_data(
    hostname: str,
    execution_timestamp: str,
    volume_groups: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Prepare the report data dictionary.

    Args:
        hostname: System hostname
        execution_timestamp: UTC timestamp of the run
        volume_groups: Topology sections, one per VG, in report order

    Returns:
        Dictionary containing all report data
    """
    return {
        'execution_timestamp': execution_timestamp,
        'hostname': hostname,
        'volume_groups': [prepare_volume_group(vg) for vg in volume_groups],
    }


def create_environment(template_dir: Path = TEMPLATE_DIR) -> Environment:
    """Jinja2 environment for line-oriented text templates"""
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_report(report_data: Dict[str, Any], env: Environment = None) -> str:
    """Render the text report from prepared report data"""
    env = env or create_environment()
    template = env.get_template(REPORT_TEMPLATE)
    return template.render(**report_data)
