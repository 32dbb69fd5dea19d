"""
Warden — Canonical Form
Deterministic text rendering of structured values.

Hashing and encryption always operate on this text, never on the
in-memory structure, so equal values produce equal digests and decrypt
to equal results.

Serializable shapes: dicts with str keys, lists/tuples, str, int,
finite float, bool and None.
"""

import json
from typing import Any

from warden.exceptions import SerializationError


def canonical_json(value: Any) -> str:
    """
    Render a value as compact JSON with sorted keys.

    Raises:
        SerializationError: The value contains an unsupported type, a
            non-string key, NaN/Infinity, a lone surrogate, a cyclic
            reference or nesting too deep to encode.
    """
    try:
        text = json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        # Lone surrogates survive dumps but have no UTF-8 form.
        text.encode("utf-8")
        # json.dumps coerces int/float/bool/None keys to strings; the
        # structure is acyclic at this point so a walk is safe.
        _check_keys(value)
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(f"Payload is not serializable: {e}") from e
    return text


def canonical_bytes(value: Any) -> bytes:
    """UTF-8 bytes of canonical_json(value)."""
    return canonical_json(value).encode("utf-8")


def parse_canonical(text: str) -> Any:
    """Parse canonical text back into a structured value."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise SerializationError(f"Text is not valid canonical JSON: {e}") from e


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name}")


def _check_keys(value: Any) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(
                    f"Payload is not serializable: key {key!r} is not a string"
                )
            _check_keys(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_keys(item)
