"""
Warden — Membership Tokens
Issue and verify encrypted tokens binding a user identifier to the time
of issuance.

A token is the ciphertext of

    {"userId": ..., "timestamp": ..., "hash": digest(userId), "nonce": ...}

Verification decrypts it, checks the stored hash against a fresh digest
of the identifier, and reports how old the token is. The nonce only
makes each ciphertext unique; it is never checked, so the same token
verifies any number of times.
"""

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable, Optional

from warden.cipher import Cipher
from warden.clock import format_timestamp, parse_timestamp, utc_now
from warden.digest import digest
from warden.exceptions import (
    DecryptionError,
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

if TYPE_CHECKING:
    from warden.config import WardenSettings

logger = logging.getLogger(__name__)

NONCE_BYTES = 16
_HOUR = timedelta(hours=1)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a successful verification."""

    user_id: str
    timestamp: str
    is_valid: bool
    hours_old: float

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "timestamp": self.timestamp,
            "isValid": self.is_valid,
            "hoursOld": self.hours_old,
        }


class MembershipTokenService:
    """
    Issues and verifies membership tokens.

    Args:
        cipher: Cipher holding the deployment's secret(s).
        clock: Returns the current time as an aware datetime.
        max_age: Optional policy rejecting old tokens. Without one,
            verify() only reports the age and callers decide.
    """

    def __init__(
        self,
        cipher: Cipher,
        *,
        clock: Callable[[], datetime] = utc_now,
        max_age: Optional[MaxAgePolicy] = None,
    ):
        self.cipher = cipher
        self.clock = clock
        self.max_age = max_age

    @classmethod
    def from_settings(cls, settings: "WardenSettings", **kwargs) -> "MembershipTokenService":
        """Build a service from loaded settings."""
        cipher = Cipher(
            Secret(settings.secret.get_secret_value()),
            previous_secrets=[Secret(s) for s in settings.previous_secret_list],
            iterations=settings.kdf_iterations,
        )
        max_age = None
        if settings.max_token_age_hours is not None:
            max_age = MaxAgePolicy(settings.max_token_age_hours)
        return cls(cipher, max_age=max_age, **kwargs)

    def issue(self, user_id: str) -> str:
        """
        Issue a token for a user.

        Returns:
            Opaque URL-safe token text.

        Raises:
            TokenCreationError: user_id is empty or any step failed.
        """
        if not isinstance(user_id, str) or not user_id:
            raise TokenCreationError("Failed to create membership token: user_id must be a non-empty string")

        try:
            payload = {
                "userId": user_id,
                "timestamp": format_timestamp(self.clock()),
                "hash": digest(user_id),
                "nonce": random_hex(NONCE_BYTES),
            }
            token = self.cipher.encrypt(payload)
        except (WardenError, ValueError, TypeError) as e:
            logger.warning("Failed to create membership token: %s", e)
            raise TokenCreationError("Failed to create membership token") from e

        logger.debug("Issued membership token at %s", payload["timestamp"])
        return token

    def verify(self, token: str) -> VerificationResult:
        """
        Verify a token and report its age.

        Raises:
            InvalidTokenError: The token cannot be decrypted or read, or
                it exceeds the configured maximum age.
            IntegrityError: The stored hash does not match the identifier.
        """
        try:
            payload = self.cipher.decrypt(token)
        except DecryptionError as e:
            logger.warning("Token verification failed: %s", e)
            raise InvalidTokenError("Invalid or corrupted membership token") from e

        user_id, timestamp, stored_hash = _read_fields(payload)

        try:
            expected_hash = digest(user_id)
        except SerializationError as e:
            logger.warning("Token verification failed: %s", e)
            raise InvalidTokenError("Invalid or corrupted membership token") from e

        if not hmac.compare_digest(stored_hash.encode("utf-8", "surrogatepass"), expected_hash.encode("utf-8")):
            logger.warning("Token integrity check failed")
            raise IntegrityError("Token integrity check failed")

        try:
            issued_at = parse_timestamp(timestamp)
        except ValueError as e:
            logger.warning("Token verification failed: bad timestamp %r", timestamp)
            raise InvalidTokenError("Invalid or corrupted membership token") from e

        hours_old = (self.clock() - issued_at) / _HOUR

        if self.max_age is not None:
            try:
                self.max_age.check(hours_old)
            except TokenExpiredError as e:
                logger.warning("Token verification failed: %s", e)
                raise

        return VerificationResult(
            user_id=user_id,
            timestamp=timestamp,
            is_valid=True,
            hours_old=hours_old,
        )


def _read_fields(payload) -> tuple:
    if not isinstance(payload, dict):
        logger.warning("Token verification failed: payload is not an object")
        raise InvalidTokenError("Invalid or corrupted membership token")

    fields = []
    for name in ("userId", "timestamp", "hash"):
        value = payload.get(name)
        if not isinstance(value, str):
            logger.warning("Token verification failed: missing field %s", name)
            raise InvalidTokenError("Invalid or corrupted membership token")
        fields.append(value)
    return tuple(fields)
