#!/usr/bin/env python3
"""
LVM topology reconciliation

Joins VG, PV and LV records by volume group membership and works out the
order in which PVs make up each VG, which is what an administrator needs to
rebuild the VG after disks get reordered or replaced.
"""

from typing import Any, Callable, Dict, List, Optional

from analyzers.lvm.records import (
    LogicalVolume,
    PhysicalVolume,
    PvOrder,
    PvOrderSource,
    VolumeGroup,
)
from analyzers.lvm.sources import BlockDevices, LvmQuery
from utils.logger import Logger


class TopologyAnalyzer:
    """Build per-VG topology sections from live LVM queries"""

    def __init__(self, lvm: LvmQuery, block_devices: BlockDevices,
                 clock: Optional[Callable[[], str]] = None):
        self.lvm = lvm
        self.block_devices = block_devices
        self.clock = clock

    def volume_groups(self, vg_filter: Optional[str] = None) -> List[VolumeGroup]:
        """VGs to report on; an unmatched filter simply yields nothing"""
        vgs = self.lvm.list_volume_groups(vg_filter)
        Logger.debug(f"Found {len(vgs)} volume group(s)")
        return vgs

    def resolve_pv_order(self, vg_name: str) -> PvOrder:
        """
        Work out the PV order of a VG.

        The VG metadata is authoritative. When it cannot be read (usually
        missing privileges) the pvs listing is used instead, in whatever
        order pvs prints it, which carries no ordering guarantee.
        """
        devices = self.lvm.metadata_devices(vg_name)
        if devices:
            return PvOrder(PvOrderSource.AUTHORITATIVE, devices)

        Logger.debug(f"No metadata devices for {vg_name}, falling back to pvs")
        devices = [
            row['pv_name']
            for row in self.lvm.list_physical_volumes()
            if row['vg_name'].strip() == vg_name.strip() and row['pv_name']
        ]
        if devices:
            return PvOrder(PvOrderSource.FALLBACK, devices)

        return PvOrder(PvOrderSource.UNRESOLVED)

    def describe_pv(self, pv_path: str, vg_name: str) -> PhysicalVolume:
        """Resolve canonical path, UUID and size for one PV"""
        pv_path = pv_path.strip()
        canonical = self.block_devices.canonical_path(pv_path)
        return PhysicalVolume(
            name=pv_path,
            canonical=canonical,
            uuid=self.lvm.pv_uuid(pv_path),
            size=self.block_devices.size_bytes(canonical),
            vg_name=vg_name,
        )

    @staticmethod
    def lvs_on_pv(pv_path: str, logical_volumes: List[LogicalVolume]) -> List[str]:
        """Names of the LVs whose device strings mention pv_path"""
        return [lv.name for lv in logical_volumes if lv.uses(pv_path)]

    def build_section(self, vg: VolumeGroup) -> Dict[str, Any]:
        """Collect everything the report shows for one volume group"""
        Logger.debug(f"Analyzing volume group {vg.name}")
        section = {
            'name': vg.name,
            'uuid': vg.uuid,
            'size': vg.size,
            'report_time': self.clock() if self.clock else '',
        }

        order = self.resolve_pv_order(vg.name)
        section['pv_order_source'] = order.source.value
        if order.resolved:
            Logger.debug(f"PV order for {vg.name} from {order.source.value}: {order.devices}")
        else:
            Logger.debug(f"Could not determine PV order for {vg.name}")

        logical_volumes = self.lvm.list_logical_volumes(vg.name)

        physical_volumes = []
        for index, pv_path in enumerate(order.devices, start=1):
            pv = self.describe_pv(pv_path, vg.name)
            physical_volumes.append({
                'index': index,
                'path': pv.name,
                'canonical': pv.canonical,
                'uuid': pv.uuid,
                'size': pv.size,
                'lvs': self.lvs_on_pv(pv.name, logical_volumes),
            })
        section['physical_volumes'] = physical_volumes

        section['logical_volumes'] = [
            {'name': lv.name, 'uuid': lv.uuid, 'size': lv.size}
            for lv in logical_volumes
        ]
        return section

    def analyze(self, vg_filter: Optional[str] = None) -> List[Dict[str, Any]]:
        """Build sections for every selected VG, in vgs order"""
        return [self.build_section(vg) for vg in self.volume_groups(vg_filter)]
