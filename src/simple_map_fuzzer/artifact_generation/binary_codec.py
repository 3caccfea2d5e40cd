"""Reversible byte transform applied to binary maps before storage.

Each byte is XORed with a key that depends only on its position:
``key(i) = (0xA5 + 31 * i) mod 256``. The transform keeps the length, is its
own inverse, and maps every byte sequence to exactly one stored form.
"""

from __future__ import annotations

from .artifact_models import EncodingError

_KEY_OFFSET = 0xA5
_KEY_STEP = 31


def _key_stream(length: int) -> bytes:
    return bytes((_KEY_OFFSET + _KEY_STEP * index) & 0xFF for index in range(length))


def encode_bytes(data: bytes) -> bytes:
    """Encode raw map bytes into their stored form."""
    return bytes(value ^ key for value, key in zip(data, _key_stream(len(data)), strict=True))


def decode_bytes(encoded: bytes) -> bytes:
    """Recover raw map bytes from their stored form."""
    return encode_bytes(encoded)


def encode_verified(data: bytes) -> bytes:
    """Encode ``data`` and check that decoding gives the original bytes back.

    Raises:
      EncodingError: If the round trip does not reproduce ``data``.
    """
    encoded = encode_bytes(data)
    if decode_bytes(encoded) != data:
        raise EncodingError(f"Binary map of {len(data)} bytes failed its round-trip check.")
    return encoded


def hint_to_bytes(hint: str) -> bytes:
    """Map each character of a custom hint to one byte.

    Raises:
      EncodingError: If a character has a code point above 255.
    """
    try:
        return hint.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise EncodingError(
            f"Custom binary hint contains a character that does not fit in one byte: "
            f"{hint[exc.start]!r}"
        ) from exc
