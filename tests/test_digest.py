"""Unit tests for payload digests."""

import hashlib

import pytest

from tests.conftest import nested_list
from warden.digest import digest
from warden.exceptions import SerializationError


class TestDigest:
    """Test SHA-256 digests of canonical payloads."""

    def test_fixed_length_lowercase_hex(self):
        value = digest({"userId": "user-42"})
        assert len(value) == 64
        assert value == value.lower()
        int(value, 16)

    def test_deterministic(self):
        payload = {"b": [1, 2, 3], "a": "x"}
        assert digest(payload) == digest(payload)

    def test_key_order_does_not_matter(self):
        assert digest({"a": 1, "b": 2}) == digest({"b": 2, "a": 1})

    def test_distinct_payloads_differ(self):
        payloads = ["user-1", "user-2", ["user-1"], {"id": "user-1"}, 1, "1", None, False]
        digests = {digest(p) for p in payloads}
        assert len(digests) == len(payloads)

    def test_hashes_canonical_text_of_string(self):
        # The quotes are part of the canonical form.
        expected = hashlib.sha256(b'"user-42"').hexdigest()
        assert digest("user-42") == expected

    def test_unserializable_payload_raises(self):
        with pytest.raises(SerializationError):
            digest({"when": object()})

    @pytest.mark.parametrize("payload", ["\ud800", {"userId": "user-\udfff"}])
    def test_lone_surrogate_raises(self, payload):
        with pytest.raises(SerializationError):
            digest(payload)

    def test_deep_nesting_raises(self):
        with pytest.raises(SerializationError):
            digest(nested_list(100_000))
