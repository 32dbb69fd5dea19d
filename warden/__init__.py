"""
Warden — Encrypted Membership Tokens
Symmetric encryption, hashing and secure randomness for issuing and
verifying self-contained membership tokens.

Warden has two layers:
1. Primitives — canonical JSON, SHA-256 digest, random hex, AES-256-GCM cipher
2. Tokens — issue a token binding a user id to a timestamp and hash;
   verify its authenticity, integrity and age

Tokens are opaque, URL-safe text. Warden does not store them; callers
decide storage, transport and expiry policy.

Usage:
    from warden import Cipher, MembershipTokenService, Secret
    service = MembershipTokenService(Cipher(Secret("my-passphrase")))
    token = service.issue("user-42")
    result = service.verify(token)
"""

from warden.canonical import canonical_json, parse_canonical
from warden.cipher import Cipher, decrypt, derive_key, encrypt
from warden.digest import digest
from warden.exceptions import (
    DecryptionError,
    EncryptionError,
    IntegrityError,
    InvalidTokenError,
    SerializationError,
    TokenCreationError,
    TokenExpiredError,
    WardenError,
)
from warden.policy import MaxAgePolicy
from warden.randomness import random_hex
from warden.secret import Secret
from warden.tokens import MembershipTokenService, VerificationResult

__version__ = "0.1.0"
__all__ = [
    "Cipher",
    "MembershipTokenService",
    "VerificationResult",
    "MaxAgePolicy",
    "Secret",
    "encrypt",
    "decrypt",
    "derive_key",
    "digest",
    "random_hex",
    "canonical_json",
    "parse_canonical",
    "WardenError",
    "SerializationError",
    "EncryptionError",
    "DecryptionError",
    "IntegrityError",
    "TokenCreationError",
    "InvalidTokenError",
    "TokenExpiredError",
]
