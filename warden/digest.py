"""SHA-256 fingerprints of canonical payloads."""

import hashlib
from typing import Any

from warden.canonical import canonical_bytes

DIGEST_SIZE = 32  # SHA-256, 64 hex characters


def digest(payload: Any) -> str:
    """Return the SHA-256 hex digest of the payload's canonical form."""
    return hashlib.sha256(canonical_bytes(payload)).hexdigest()
