"""Deterministic string digests used for record identity."""

import hashlib


def hash_string(text: str) -> str:
    """Return the MD5 hex digest of a string.

    Used for record hashes, Association deduplication, and synthetic
    query-edge representations. Stable across processes.

    Args:
        text: String to digest

    Returns:
        32-character lowercase hex digest
    """
    return hashlib.md5(text.encode("utf-8")).hexdigest()
