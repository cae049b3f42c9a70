#!/usr/bin/env python3
"""Host information for the report header"""

import socket
from datetime import datetime, timezone
from utils.logger import Logger


def get_hostname() -> str:
    """Return the local host name"""
    try:
        hostname = socket.gethostname().strip()
        if hostname:
            return hostname
        return "Unknown"
    except OSError as e:
        Logger.warning(f"Failed to get hostname: {e}")
        return "Unknown"


def get_execution_timestamp() -> str:
    """Get current UTC timestamp in ISO-8601 form"""
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')
