"""LVM topology analyzers."""

from .records import (
    LogicalVolume,
    PhysicalVolume,
    PvOrder,
    PvOrderSource,
    VolumeGroup,
    parse_report_rows,
)
from .sources import BlockDevices, LvmQuery
from .topology import TopologyAnalyzer

__all__ = [
    'LogicalVolume',
    'PhysicalVolume',
    'PvOrder',
    'PvOrderSource',
    'VolumeGroup',
    'parse_report_rows',
    'BlockDevices',
    'LvmQuery',
    'TopologyAnalyzer',
]
