"""
Module 05 - Hashing Utilities

SHA-256 helpers used for program-derived address computation.

Determinism Notes:
- Always hash raw bytes exactly as given
- Concatenation order is significant
"""
from __future__ import annotations

import hashlib
from typing import Iterable


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_parts(parts: Iterable[bytes]) -> bytes:
    """
    Hash the in-order concatenation of several byte strings.

    Args:
        parts: Byte strings, hashed as if joined end to end

    Returns:
        32-byte SHA-256 digest
    """
    hasher = hashlib.sha256()
    for part in parts:
        hasher.update(part)
    return hasher.digest()


__all__ = [
    "sha256",
    "hash_parts",
]
