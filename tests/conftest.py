"""Shared fixtures: an in-memory stand-in for the LVM command line tools."""

import pytest

from utils.logger import Logger

SEP = '\x1f'


class FakeLvm:
    """
    Answers vgs/pvs/lvs/vgcfgbackup/lsblk invocations from in-memory data.

    Rows are rendered the way LVM prints them with --noheadings and
    --units b: indented, separator-delimited, sizes suffixed with "B".
    """

    def __init__(self):
        self.vgs = []        # dicts: vg_name, vg_uuid, vg_size
        self.pvs = []        # dicts: pv_name, vg_name, pv_uuid
        self.lvs = []        # dicts: lv_name, lv_uuid, lv_size, vg_name, devices
        self.metadata = {}   # vg name -> vgcfgbackup text
        self.sizes = {}      # device path -> bytes
        self.failing = set() # tools that exit non-zero
        self.degraded = set() # tools that exit non-zero but still print rows
        self.calls = []

    def add_vg(self, name, uuid, size):
        self.vgs.append({'vg_name': name, 'vg_uuid': uuid, 'vg_size': f"{size}B"})

    def add_pv(self, name, vg_name, uuid, size=None):
        self.pvs.append({'pv_name': name, 'vg_name': vg_name, 'pv_uuid': uuid})
        if size is not None:
            self.sizes[name] = size

    def add_lv(self, name, uuid, size, vg_name, devices=''):
        self.lvs.append({
            'lv_name': name,
            'lv_uuid': uuid,
            'lv_size': f"{size}B",
            'vg_name': vg_name,
            'devices': devices,
        })

    def set_metadata(self, vg_name, devices):
        pvs = "\n".join(
            f'\t\tpv{i} {{\n\t\t\tid = "x{i}"\n\t\t\tdevice = "{dev}"\t# Hint only\n\t\t}}'
            for i, dev in enumerate(devices)
        )
        self.metadata[vg_name] = (
            f'{vg_name} {{\n\tid = "abc"\n\tphysical_volumes {{\n{pvs}\n\t}}\n}}\n'
        )

    @staticmethod
    def _option(args, name):
        if name in args:
            return args[args.index(name) + 1]
        return None

    def _report(self, rows, args):
        fields = self._option(args, '-o').split(',')
        select = self._option(args, '--select')
        if select:
            key, value = select.split('=', 1)
            rows = [row for row in rows if row.get(key) == value]
        return "".join(
            "  " + SEP.join(row.get(field, '') for field in fields) + "\n"
            for row in rows
        )

    def __call__(self, args):
        args = list(args)
        self.calls.append(args)
        tool = args[0]
        if tool in self.failing:
            return 5, '', f"{tool}: permission denied"
        if tool in self.degraded:
            rows = {'vgs': self.vgs, 'pvs': self.pvs, 'lvs': self.lvs}[tool]
            return 5, self._report(rows, args), "  WARNING: VG vg9 is missing PV xyz"
        if tool == 'vgs':
            return 0, self._report(self.vgs, args), ''
        if tool == 'pvs':
            return 0, self._report(self.pvs, args), ''
        if tool == 'lvs':
            return 0, self._report(self.lvs, args), ''
        if tool == 'vgcfgbackup':
            vg_name = args[-1]
            if vg_name not in self.metadata:
                return 5, '', f"Volume group \"{vg_name}\" not found"
            return 0, self.metadata[vg_name], ''
        if tool == 'lsblk':
            path = args[-1]
            if path not in self.sizes:
                return 32, '', f"lsblk: {path}: not a block device"
            return 0, f"{self.sizes[path]}\n", ''
        return 127, '', f"{tool}: command not found"


@pytest.fixture
def fake_lvm():
    return FakeLvm()


@pytest.fixture
def example_lvm(fake_lvm):
    """One VG with two PVs and one LV living on the first PV."""
    fake_lvm.add_vg('vg0', 'U1', 10737418240)
    fake_lvm.add_pv('/dev/sda1', 'vg0', 'PV-A', 5368709120)
    fake_lvm.add_pv('/dev/sdb1', 'vg0', 'PV-B', 5368709120)
    fake_lvm.set_metadata('vg0', ['/dev/sda1', '/dev/sdb1'])
    fake_lvm.add_lv('lv0', 'U2', 2147483648, 'vg0', '/dev/sda1(0)')
    return fake_lvm


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    Logger.set_debug(False)
