"""Common utility functions for bibfolio: hashing and timestamps."""

from bibfolio.utils.hashing import (
    calculate_file_digest,
    calculate_file_sha256,
    format_sha256,
)
from bibfolio.utils.timestamps import get_file_mtime, get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "get_file_mtime",
    "calculate_file_sha256",
    "calculate_file_digest",
    "format_sha256",
]
