"""
Utility functions for common operations.

Provides helper functions for:
- File size formatting
- Cryptographic hashing
- Batch-unique ID generation
- Money formatting for the dashboard
"""
from __future__ import annotations
import hashlib
import uuid
from typing import Union

from core.logger import get_logger

log = get_logger("core/utils")


def human_size(num_bytes: Union[int, float]) -> str:
    """
    Convert bytes to human-readable size format.

    Converts byte values into appropriate units (B, KB, MB, GB, TB)
    with one decimal place precision.

    Args:
        num_bytes: Number of bytes to convert

    Returns:
        str: Formatted size string (e.g., "1.5 MB")

    Examples:
        >>> human_size(1024)
        "1.0 KB"
        >>> human_size(0)
        "0.0 B"
    """
    if not isinstance(num_bytes, (int, float)):
        log.warning(f"Invalid input type for human_size: {type(num_bytes)}")
        return "0.0 B"

    if num_bytes < 0:
        log.warning(f"Negative byte value: {num_bytes}")
        return "0.0 B"

    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    size = float(num_bytes)
    idx = 0

    while size >= 1024 and idx < len(units) - 1:
        size /= 1024
        idx += 1

    return f"{size:.1f} {units[idx]}"


def sha256_bytes(data: bytes) -> str:
    """
    Calculate SHA-256 hash of byte data.

    Args:
        data: Bytes to hash

    Returns:
        str: Hexadecimal hash digest

    Raises:
        TypeError: If data is not bytes
    """
    if not isinstance(data, bytes):
        error_msg = f"Expected bytes, got {type(data)}"
        log.error(error_msg)
        raise TypeError(error_msg)

    hash_digest = hashlib.sha256(data).hexdigest()
    log.debug(f"Generated SHA-256 hash: length={len(data)} bytes hash={hash_digest[:16]}...")

    return hash_digest


def new_batch_id() -> str:
    """Short random prefix shared by every transaction id of one batch run."""
    return uuid.uuid4().hex[:12]


def make_transaction_id(batch_id: str, doc_index: int, record_index: int) -> str:
    """
    Build a transaction id that is unique across a whole batch.

    The document index keeps ids from two documents apart even when both
    return the same number of records.

    Examples:
        >>> make_transaction_id("a1b2c3", 0, 4)
        "a1b2c3-0-4"
    """
    return f"{batch_id}-{doc_index}-{record_index}"


def format_money(amount: Union[int, float], symbol: str = "$") -> str:
    """
    Format an amount for display, keeping the sign in front of the symbol.

    Examples:
        >>> format_money(1234.5)
        "$1,234.50"
        >>> format_money(-4.5)
        "-$4.50"
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
