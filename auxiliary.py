#!/usr/bin/env python3
"""
Auxiliary utility functions for Kathairo

Size and path formatting shared by the scanner, the summary and the
console output.
"""

import os
import pathlib
from typing import Optional


def format_bytes(size_bytes: int) -> str:
    """Format byte size into human-readable string

    Args:
        size_bytes: Size in bytes to format

    Returns:
        Formatted string like "1.2 GiB", "345 MiB", "12 KiB", or "789 B"
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GiB"
    if size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MiB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KiB"
    return f"{size_bytes} B"


def format_path_for_display(path: str, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    if path == home_path or path.startswith(home_path.rstrip(os.sep) + os.sep):
        return "~" + path[len(home_path.rstrip(os.sep)) :]
    return path


def dir_size(path: str) -> int:
    """Return the total size in bytes of a directory tree.

    Unreadable files and subdirectories are left out of the total.
    """
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path, followlinks=False):
        for f in filenames:
            try:
                total += os.lstat(pathlib.Path(dirpath) / f).st_size
            except OSError:
                pass
    return total
