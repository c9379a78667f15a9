"""Change detection for fetched feed sources."""

import hashlib

HASH_SIZE = hashlib.sha256().digest_size


def source_hash(source: bytes) -> bytes:
    """Return the SHA-256 digest of raw feed bytes."""
    return hashlib.sha256(source).digest()
