"""
Module 02 - Key Material Codec

Canonical textual encoding for fixed-size key and signature buffers.

Owner: Protocol/Crypto Engineer

This module provides:
- base58 (Bitcoin alphabet) encoding of raw byte buffers
- Length-checked decoding back to raw bytes
- Field-specific helpers for public keys, secret keys and signatures

Security/Determinism Notes:
- base58 is the only alphabet accepted anywhere in the service
- Decoding validates the alphabet before touching the decoder
- DecodeError messages never include the input or decoded bytes
"""
from __future__ import annotations

import base58

from core.crypto.errors import DecodeError


PUBLIC_KEY_LENGTH = 32
SEED_LENGTH = 32
SECRET_KEY_LENGTH = 64
SIGNATURE_LENGTH = 64

ALPHABET = base58.BITCOIN_ALPHABET.decode("ascii")
_ALPHABET_SET = frozenset(ALPHABET)

# Longest base58 text a 64-byte buffer can produce, with slack.
_MAX_ENCODED_LENGTH = 128


def encode(data: bytes) -> str:
    """
    Encode a raw byte buffer as base58 text.

    Args:
        data: Raw bytes (typically 32 or 64 bytes)

    Returns:
        base58 string

    Example:
        >>> encode(bytes(32))
        '11111111111111111111111111111111'
    """
    return base58.b58encode(bytes(data)).decode("ascii")


def decode(text: str, expected_length: int, *, field: str = "value") -> bytes:
    """
    Decode base58 text into exactly ``expected_length`` bytes.

    Args:
        text: base58 string
        expected_length: Required decoded length in bytes
        field: Name of the field being decoded, used in error messages

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If the input is not a string, is empty, contains
                     characters outside the base58 alphabet, or decodes
                     to a different length
    """
    if not isinstance(text, str):
        raise DecodeError(f"Invalid {field}: expected a base58 string", field=field, value=text)

    if not text:
        raise DecodeError(f"Invalid {field}: empty value", field=field, value=text)

    if len(text) > _MAX_ENCODED_LENGTH or not _ALPHABET_SET.issuperset(text):
        raise DecodeError(
            f"Invalid {field}: not a valid base58 string",
            field=field,
            value=text,
        )

    raw = base58.b58decode(text)

    if len(raw) != expected_length:
        raise DecodeError(
            f"Invalid {field} length: expected {expected_length} bytes, got {len(raw)}",
            field=field,
            value=text,
            expected_length=expected_length,
            actual_length=len(raw),
        )

    return raw


def decode_public_key(text: str, *, field: str = "pubkey") -> bytes:
    """Decode a 32-byte public key."""
    return decode(text, PUBLIC_KEY_LENGTH, field=field)


def decode_secret_key(text: str, *, field: str = "secret") -> bytes:
    """Decode a 64-byte secret key (seed followed by public key)."""
    return decode(text, SECRET_KEY_LENGTH, field=field)


def decode_signature(text: str, *, field: str = "signature") -> bytes:
    """Decode a 64-byte detached signature."""
    return decode(text, SIGNATURE_LENGTH, field=field)


__all__ = [
    "PUBLIC_KEY_LENGTH",
    "SEED_LENGTH",
    "SECRET_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "ALPHABET",
    "encode",
    "decode",
    "decode_public_key",
    "decode_secret_key",
    "decode_signature",
]
