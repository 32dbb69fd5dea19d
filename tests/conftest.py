"""Shared fixtures for Warden tests."""

import base64
import os
from datetime import datetime, timedelta, timezone

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from warden import Cipher, MembershipTokenService, Secret
from warden.cipher import NONCE_SIZE, SALT_SIZE, derive_key

# Low iteration count keeps key derivation fast in tests.
TEST_ITERATIONS = 1_000
TEST_PASSPHRASE = "test-passphrase-do-not-use-in-production"


def seal_raw(plaintext: bytes, secret: Secret, iterations: int = TEST_ITERATIONS) -> str:
    """Encrypt raw bytes in the ciphertext layout, skipping canonicalization."""
    salt = os.urandom(SALT_SIZE)
    nonce = os.urandom(NONCE_SIZE)
    key = derive_key(secret, salt, iterations)
    body = AESGCM(key).encrypt(nonce, plaintext, None)
    return base64.urlsafe_b64encode(salt + nonce + body).decode("ascii")


def nested_list(depth: int) -> list:
    value = []
    for _ in range(depth):
        value = [value]
    return value

class FakeClock:
    """Controllable clock returning aware UTC datetimes."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def secret():
    return Secret(TEST_PASSPHRASE)


@pytest.fixture
def cipher(secret):
    return Cipher(secret, iterations=TEST_ITERATIONS)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 8, 0, 0, 123000, tzinfo=timezone.utc))


@pytest.fixture
def service(cipher, clock):
    return MembershipTokenService(cipher, clock=clock)
