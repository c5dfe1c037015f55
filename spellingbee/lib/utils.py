"""Shared utility functions"""

import re
from pathlib import Path


def find_path(name, max_levels=3):
    """Find path in current or parent directories"""
    for level in range(max_levels):
        path = Path("../" * level + str(name))
        if path.exists():
            return path
    return Path(name)


def safe_filename(name):
    """Strip characters Windows and macOS refuse in file names"""
    return re.sub(r'[<>:"/\\|?*]', '', name).strip()
