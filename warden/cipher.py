"""
Warden — Cipher
AES-256-GCM encryption of canonical payloads under a passphrase.

Every ciphertext carries its own salt and nonce:

    urlsafe_b64( salt[16] || nonce[12] || ciphertext+tag )

The key is derived from the passphrase and the per-message salt with
PBKDF2, so the only shared state is the passphrase itself. The GCM tag
rejects wrong keys and tampered text before any parsing happens.
"""

import base64
import binascii
import logging
import os
from typing import Any, Iterable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from warden.canonical import canonical_bytes, parse_canonical
from warden.exceptions import DecryptionError, EncryptionError, SerializationError
from warden.secret import Secret

logger = logging.getLogger(__name__)

# Key derivation parameters
PBKDF2_ITERATIONS = 600_000  # OWASP recommended minimum
SALT_SIZE = 16
NONCE_SIZE = 12  # AES-256-GCM standard
KEY_SIZE = 32    # 256 bits
TAG_SIZE = 16

HEADER_SIZE = SALT_SIZE + NONCE_SIZE


def derive_key(secret: Secret, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> bytes:
    """Derive an AES key from a passphrase using PBKDF2."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(secret.encode())


def encrypt(payload: Any, secret: Secret, *, iterations: int = PBKDF2_ITERATIONS) -> str:
    """
    Encrypt a payload under a passphrase.

    Args:
        payload: Any serializable value (see warden.canonical).
        secret: The passphrase to derive the key from.
        iterations: PBKDF2 iteration count. Must match on decrypt.

    Returns:
        URL-safe base64 text embedding salt, nonce and ciphertext.

    Raises:
        EncryptionError: The payload is not serializable or the cipher failed.
    """
    try:
        plaintext = canonical_bytes(payload)
    except SerializationError as e:
        raise EncryptionError(f"Encryption failed: {e}") from e

    try:
        salt = os.urandom(SALT_SIZE)
        nonce = os.urandom(NONCE_SIZE)
        key = derive_key(secret, salt, iterations)
        ciphertext = AESGCM(key).encrypt(nonce, plaintext, None)
    except Exception as e:
        raise EncryptionError(f"Encryption failed: {e}") from e

    return base64.urlsafe_b64encode(salt + nonce + ciphertext).decode("ascii")


def decrypt(ciphertext: str, secret: Secret, *, iterations: int = PBKDF2_ITERATIONS) -> Any:
    """
    Decrypt text produced by encrypt() and parse it back into a value.

    Raises:
        DecryptionError: The text is malformed, the key is wrong, the
            data was tampered with, or the plaintext is not canonical JSON.
    """
    raw = _decode(ciphertext)
    salt, nonce, body = raw[:SALT_SIZE], raw[SALT_SIZE:HEADER_SIZE], raw[HEADER_SIZE:]

    try:
        key = derive_key(secret, salt, iterations)
        plaintext = AESGCM(key).decrypt(nonce, body, None)
    except InvalidTag as e:
        raise DecryptionError("Decryption failed: wrong key or tampered data") from e
    except (TypeError, ValueError, OverflowError) as e:
        raise DecryptionError(f"Decryption failed: {e}") from e

    try:
        return parse_canonical(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, SerializationError) as e:
        raise DecryptionError(f"Decryption failed: {e}") from e


def _decode(ciphertext: str) -> bytes:
    if not isinstance(ciphertext, str):
        raise DecryptionError("Decryption failed: ciphertext must be text")
    try:
        raw = base64.urlsafe_b64decode(ciphertext.encode("ascii"))
    except (UnicodeEncodeError, binascii.Error, ValueError) as e:
        raise DecryptionError("Decryption failed: malformed ciphertext") from e
    # Reject stray characters and non-canonical trailing bits.
    if base64.urlsafe_b64encode(raw).decode("ascii") != ciphertext:
        raise DecryptionError("Decryption failed: malformed ciphertext")
    if len(raw) < HEADER_SIZE + TAG_SIZE:
        raise DecryptionError("Decryption failed: ciphertext too short")
    return raw


class Cipher:
    """
    Passphrase-keyed cipher for one deployment.

    Encrypts with the current secret. Decrypts with the current secret
    first, then each previous secret in order, so tokens issued before a
    rotation keep working while the old secret is still listed.

    Args:
        secret: The current passphrase.
        previous_secrets: Retired passphrases still accepted on decrypt.
        iterations: PBKDF2 iteration count shared by all secrets.
    """

    def __init__(
        self,
        secret: Secret,
        *,
        previous_secrets: Iterable[Secret] = (),
        iterations: int = PBKDF2_ITERATIONS,
    ):
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        self._secret = secret
        self._previous = tuple(previous_secrets)
        self.iterations = iterations

    def encrypt(self, payload: Any) -> str:
        return encrypt(payload, self._secret, iterations=self.iterations)

    def decrypt(self, ciphertext: str) -> Any:
        try:
            return decrypt(ciphertext, self._secret, iterations=self.iterations)
        except DecryptionError as e:
            if not self._previous:
                raise
            last_error = e

        for index, secret in enumerate(self._previous):
            try:
                payload = decrypt(ciphertext, secret, iterations=self.iterations)
            except DecryptionError as e:
                last_error = e
                continue
            logger.info("Decrypted with previous secret #%d", index)
            return payload

        raise last_error
