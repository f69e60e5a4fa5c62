"""Cryptographic helpers — hashing."""

from __future__ import annotations

import hashlib


def sha256d(data: bytes) -> bytes:
    """Double SHA-256 hash (SHA256(SHA256(data)))."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()
