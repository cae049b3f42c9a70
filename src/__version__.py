"""Version information for peepdrive."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "peepdrive"
VERSION_FILE = Path(__file__).parent.parent / "VERSION"


def get_version():
    """Installed distribution version, else the VERSION file of a checkout."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        pass
    try:
        return VERSION_FILE.read_text(encoding='utf-8').strip()
    except OSError:
        return "unknown"

__version__ = get_version()
