"""
Formatting helpers for the terminal output.
"""

from __future__ import annotations

import os


def format_duration(duration_ms: int) -> str:
    """Format a duration in milliseconds.

    Examples:
        750 -> "750ms"
        1500 -> "1.500s"
        2050 -> "2.050s"
    """
    if duration_ms < 1000:
        return f"{duration_ms}ms"
    seconds, ms = divmod(duration_ms, 1000)
    return f"{seconds}.{ms:03d}s"


def format_file_path(file_path: str, cwd: str | None = None) -> str:
    """Show a path relative to the working directory when it lives under it."""
    cwd = cwd if cwd is not None else os.getcwd()
    if file_path.startswith(cwd):
        return ("." + file_path[len(cwd) :]).replace("\\", "/")
    return file_path
