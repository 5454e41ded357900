"""
Module 03 - Ed25519 Keypairs

Keypair generation and public-key derivation.

The secret key uses the Solana keypair layout: the 32-byte seed followed by
the 32-byte public key derived from it. The public key is always derived,
never assigned.

Randomness comes from an EntropySource so tests can inject a deterministic
one. The default source is the OS CSPRNG.
"""

from __future__ import annotations

import hmac
import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Protocol

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from core.crypto.encoding import SECRET_KEY_LENGTH, SEED_LENGTH, encode
from core.crypto.errors import EntropyError, InvalidKeyError


logger = logging.getLogger(__name__)


class EntropySource(Protocol):
    """Capability for drawing cryptographically secure random bytes."""

    def read(self, n: int) -> bytes:
        ...


class SystemEntropySource:
    """OS CSPRNG. Safe for concurrent use, no locking on our side."""

    def read(self, n: int) -> bytes:
        return os.urandom(n)


def scrub(buffer: bytearray) -> None:
    """Overwrite a mutable buffer with zeros."""
    for i in range(len(buffer)):
        buffer[i] = 0


def _private_key_from_seed(seed: bytes | bytearray) -> Ed25519PrivateKey:
    return Ed25519PrivateKey.from_private_bytes(bytes(seed))


def _raw_public_bytes(private_key: Ed25519PrivateKey) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def derive_public_key(secret: bytes) -> bytes:
    """
    Derive the Ed25519 public key from a seed or a full secret key.

    Args:
        secret: 32-byte seed or 64-byte secret key (seed || public key)

    Returns:
        32-byte public key

    Raises:
        InvalidKeyError: If the input has any other length
    """
    if len(secret) not in (SEED_LENGTH, SECRET_KEY_LENGTH):
        raise InvalidKeyError(
            f"Invalid secret key length: expected {SEED_LENGTH} or {SECRET_KEY_LENGTH} bytes, "
            f"got {len(secret)}"
        )

    seed = bytearray(secret[:SEED_LENGTH])
    try:
        return _raw_public_bytes(_private_key_from_seed(seed))
    finally:
        scrub(seed)


@dataclass(frozen=True)
class Keypair:
    """
    An Ed25519 keypair.

    Attributes:
        public_key: 32-byte public key
        secret_key: 64-byte secret key (seed || public key), hidden from repr
    """
    public_key: bytes
    secret_key: bytes = field(repr=False)

    @property
    def seed(self) -> bytes:
        """The 32-byte seed half of the secret key."""
        return self.secret_key[:SEED_LENGTH]

    @property
    def pubkey(self) -> str:
        """Public key as base58 text."""
        return encode(self.public_key)

    @classmethod
    def from_seed(cls, seed: bytes) -> "Keypair":
        """Build a keypair from a 32-byte seed."""
        if len(seed) != SEED_LENGTH:
            raise InvalidKeyError(
                f"Invalid seed length: expected {SEED_LENGTH} bytes, got {len(seed)}"
            )
        public_key = derive_public_key(seed)
        return cls(public_key=public_key, secret_key=bytes(seed) + public_key)

    @classmethod
    def from_secret_key(cls, secret_key: bytes) -> "Keypair":
        """
        Rebuild a keypair from a 64-byte secret key.

        Raises:
            InvalidKeyError: If the length is wrong or the public half does not
                             match the key derived from the seed
        """
        if len(secret_key) != SECRET_KEY_LENGTH:
            raise InvalidKeyError(
                f"Invalid keypair length: expected {SECRET_KEY_LENGTH} bytes, got {len(secret_key)}"
            )
        derived = derive_public_key(secret_key)
        if not hmac.compare_digest(derived, bytes(secret_key[SEED_LENGTH:])):
            raise InvalidKeyError("Invalid secret key: public key half does not match seed")
        return cls(public_key=derived, secret_key=bytes(secret_key))


class KeypairFactory:
    """
    Generates fresh keypairs from an entropy source.

    Usage:
        factory = KeypairFactory()
        keypair = factory.generate()
    """

    def __init__(self, entropy: Optional[EntropySource] = None) -> None:
        self.entropy = entropy or SystemEntropySource()

    def generate(self) -> Keypair:
        """
        Generate a new keypair.

        Raises:
            EntropyError: If the entropy source fails or returns a short read
        """
        try:
            drawn = self.entropy.read(SEED_LENGTH)
        except OSError as e:
            logger.error(f"Entropy source failed: {type(e).__name__}")
            raise EntropyError(f"Entropy source unavailable: {type(e).__name__}") from e

        if drawn is None or len(drawn) != SEED_LENGTH:
            raise EntropyError("Entropy source returned a short read")

        seed = bytearray(drawn)
        try:
            return Keypair.from_seed(bytes(seed))
        finally:
            scrub(seed)


__all__ = [
    "EntropySource",
    "SystemEntropySource",
    "Keypair",
    "KeypairFactory",
    "derive_public_key",
    "scrub",
]
