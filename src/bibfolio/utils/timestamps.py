"""Timestamp helpers for audit events and ingestion results."""

from datetime import UTC, datetime
from pathlib import Path

__all__ = ["get_iso_timestamp", "get_file_mtime"]


def get_iso_timestamp() -> str:
    """Return the current UTC time as ISO8601 with microseconds and a 'Z' suffix."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def get_file_mtime(file_path: Path) -> str:
    """Get modification time of a bibliography file.

    Parameters
    ----------
    file_path : Path
        Path to file.

    Returns
    -------
    str
        ISO8601 timestamp truncated to seconds, or "" if the file cannot be
        stat'ed.
    """
    try:
        mtime = datetime.fromtimestamp(file_path.stat().st_mtime, UTC)
    except (OSError, ValueError):
        return ""
    return mtime.replace(microsecond=0).isoformat().replace("+00:00", "Z")
