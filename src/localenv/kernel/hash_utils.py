"""Hash utilities for directory identity and configuration content.

Two independent contracts:
- Directory keys: SHA-256 of the canonical (symlink-resolved) absolute path.
  Used only as an opaque storage key; the store keeps the plaintext path
  alongside it, so this is obfuscation rather than anonymization.
- Content hashes: SHA-256 of the raw file bytes, prefixed with "sha256:".
  Any byte-level change, whitespace included, changes the digest.
"""

import hashlib
import os
from pathlib import Path
from typing import Union

CONTENT_HASH_PREFIX = "sha256:"


def canonicalize_dir(path: Union[str, os.PathLike]) -> str:
    """Return the canonical absolute form of a directory path.

    Symlinks are resolved so that two routes to the same directory share
    one trust record. Non-existent paths are still made absolute.
    """
    return str(Path(path).resolve())


def hash_path(canonical_path: str) -> str:
    """Compute the storage key for a canonical directory path.

    Args:
        canonical_path: Output of canonicalize_dir()

    Returns:
        SHA256 hash as hex string (no prefix)
    """
    return hashlib.sha256(canonical_path.encode("utf-8")).hexdigest()


def hash_content(content: Union[str, bytes]) -> str:
    """Compute SHA256 hash of configuration file content.

    Args:
        content: File content as bytes (preferred) or string

    Returns:
        SHA256 hash as hex string (prefixed with "sha256:")
    """
    if isinstance(content, str):
        content_bytes = content.encode("utf-8")
    else:
        content_bytes = content

    digest = hashlib.sha256(content_bytes).hexdigest()
    return f"{CONTENT_HASH_PREFIX}{digest}"


def is_content_hash(value: str) -> bool:
    """Check that a value looks like a hash_content() digest."""
    if not value.startswith(CONTENT_HASH_PREFIX):
        return False
    hex_part = value[len(CONTENT_HASH_PREFIX):]
    return len(hex_part) == 64 and all(c in "0123456789abcdef" for c in hex_part)
