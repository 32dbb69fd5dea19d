"""
Warden — Errors
Small, stable error surface for the token subsystem.

Low-level failures (serialization, cipher) are wrapped into the
higher-level kinds at the service boundary, so callers of issue/verify
only ever see creation, verification or integrity failures.
"""


class WardenError(Exception):
    """Base exception for all Warden errors."""


class SerializationError(WardenError):
    """Raised when a payload cannot be rendered to canonical form."""


class EncryptionError(WardenError):
    """Raised when encryption fails."""


class DecryptionError(WardenError):
    """Raised when decryption fails (malformed text, wrong key, tampered data)."""


class IntegrityError(WardenError):
    """Raised when a token's stored hash does not match its identifier."""


class TokenCreationError(WardenError):
    """Raised when a membership token cannot be issued."""


class InvalidTokenError(WardenError):
    """Raised when a membership token cannot be decrypted or read."""


class TokenExpiredError(InvalidTokenError):
    """Raised when a token is older than the configured maximum age."""
