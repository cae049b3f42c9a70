import sys
from unittest.mock import patch

import pytest

from utils.command_runner import (
    MissingCommandError,
    missing_commands,
    require_commands,
    run_command,
)

TARGET_MOD = 'utils.command_runner'


def test_run_command_captures_output():
    rc, out, err = run_command([sys.executable, '-c', 'print("vg0")'])
    assert rc == 0
    assert out.strip() == 'vg0'
    assert err == ''


def test_run_command_uses_c_locale():
    rc, out, _ = run_command([sys.executable, '-c', 'import os; print(os.environ["LC_ALL"])'])
    assert rc == 0
    assert out.strip() == 'C'


def test_run_command_nonzero_exit_is_returned():
    rc, _, err = run_command([sys.executable, '-c', 'import sys; sys.stderr.write("no"); sys.exit(5)'])
    assert rc == 5
    assert err == 'no'


def test_run_command_missing_binary():
    rc, out, err = run_command(['peepdrive-no-such-tool-xyz'])
    assert rc == 127
    assert out == ''
    assert err


def test_missing_commands_keeps_order():
    available = {'vgs', 'lvs', 'lsblk'}
    with patch(f'{TARGET_MOD}.shutil.which', side_effect=lambda c: f'/sbin/{c}' if c in available else None):
        assert missing_commands() == ['pvs', 'vgcfgbackup']


def test_require_commands_raises():
    with patch(f'{TARGET_MOD}.shutil.which', return_value=None):
        with pytest.raises(MissingCommandError) as excinfo:
            require_commands(['vgs'])
    assert str(excinfo.value) == 'Required command not found: vgs'


def test_require_commands_passes():
    with patch(f'{TARGET_MOD}.shutil.which', return_value='/sbin/x'):
        require_commands()
