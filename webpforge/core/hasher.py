"""Content fingerprints for cache artifact names.

BLAKE2s is the fastest digest ``hashlib`` ships for short-to-medium
buffers.  The hex digest is truncated to the configured length and embedded
in artifact file names, so the same bytes always map to the same name.
"""

from __future__ import annotations

import hashlib

DEFAULT_FINGERPRINT_LENGTH = 6
MAX_FINGERPRINT_LENGTH = 64  # blake2s hex digest length


def blake2s_hex(data: bytes) -> str:
    """Return the full BLAKE2s-256 hex digest of raw bytes."""
    return hashlib.blake2s(data).hexdigest()


def fingerprint(data: bytes, length: int = DEFAULT_FINGERPRINT_LENGTH) -> str:
    """Fingerprint a buffer as ``length`` lowercase hex characters."""
    if not 1 <= length <= MAX_FINGERPRINT_LENGTH:
        raise ValueError(
            f"Fingerprint length must be between 1 and {MAX_FINGERPRINT_LENGTH}, got {length}"
        )
    return blake2s_hex(data)[:length]
