"""
Module 04 - Detached Ed25519 Signatures

Signing and verification over raw byte buffers.

Signing is deterministic (RFC 8032): the same secret key and message always
yield the same 64-byte signature.

Verification never raises for adversarial data. A malformed, truncated or
forged signature, a 32-byte value that is not a curve point, or a
small-order public key all give False. Only a public key of the wrong length
is rejected with InvalidKeyError.
"""
from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from core.crypto.encoding import (
    PUBLIC_KEY_LENGTH,
    SECRET_KEY_LENGTH,
    SEED_LENGTH,
    SIGNATURE_LENGTH,
    encode,
)
from core.crypto.errors import InvalidKeyError
from core.crypto.keys import Keypair, scrub


# Encodings of the eight torsion points, sign bit cleared (libsodium blocklist).
_SMALL_ORDER_ENCODINGS = frozenset(
    bytes.fromhex(h)
    for h in (
        # 0 (order 4)
        "0000000000000000000000000000000000000000000000000000000000000000",
        # 1 (order 1)
        "0100000000000000000000000000000000000000000000000000000000000000",
        # order 8
        "26e8958fc2b227b045c3f489f2ef98f0d5dfac05d3c63339b13802886d53fc05",
        # order 8
        "c7176a703d4dd84fba3c0b760d10670f2a2053fa2c39ccc64ec7fd7792ac037a",
        # p - 1 (order 2)
        "ecffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",
        # p (non-canonical 0)
        "edffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",
        # p + 1 (non-canonical 1)
        "eeffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff7f",
    )
)


@dataclass(frozen=True)
class SignedMessage:
    """A message together with its detached signature and signer public key."""
    message: bytes
    signature: bytes
    pubkey: bytes

    def to_dict(self) -> dict[str, str]:
        return {
            "signature": encode(self.signature),
            "pubkey": encode(self.pubkey),
            "message": self.message.decode("utf-8", errors="replace"),
        }


def _is_small_order(public_key: bytes) -> bool:
    masked = public_key[:-1] + bytes([public_key[-1] & 0x7F])
    return masked in _SMALL_ORDER_ENCODINGS


def sign(secret_key: bytes, message: bytes) -> bytes:
    """
    Produce a detached Ed25519 signature.

    Args:
        secret_key: 64-byte secret key (seed || public key)
        message: Message bytes

    Returns:
        64-byte signature

    Raises:
        InvalidKeyError: If the secret key has the wrong length or its public
                         half does not match its seed
    """
    if len(secret_key) != SECRET_KEY_LENGTH:
        raise InvalidKeyError(
            f"Invalid keypair length: expected {SECRET_KEY_LENGTH} bytes, got {len(secret_key)}"
        )

    # Validates the public half against the seed.
    Keypair.from_secret_key(secret_key)

    seed = bytearray(secret_key[:SEED_LENGTH])
    try:
        private_key = Ed25519PrivateKey.from_private_bytes(bytes(seed))
    finally:
        scrub(seed)
    return private_key.sign(bytes(message))


def sign_message(keypair: Keypair, message: bytes) -> SignedMessage:
    """Sign ``message`` with ``keypair`` and bundle the result."""
    signature = sign(keypair.secret_key, message)
    return SignedMessage(message=bytes(message), signature=signature, pubkey=keypair.public_key)


def verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify a detached Ed25519 signature.

    Args:
        public_key: 32-byte public key
        message: Message bytes
        signature: Signature bytes (any length; only 64 can be valid)

    Returns:
        True if the signature is valid for this key and message, else False

    Raises:
        InvalidKeyError: If the public key is not exactly 32 bytes
    """
    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise InvalidKeyError(
            f"Invalid public key length: expected {PUBLIC_KEY_LENGTH} bytes, got {len(public_key)}"
        )

    if len(signature) != SIGNATURE_LENGTH:
        return False

    if _is_small_order(bytes(public_key)):
        return False

    try:
        key = Ed25519PublicKey.from_public_bytes(bytes(public_key))
    except ValueError:
        return False

    try:
        key.verify(bytes(signature), bytes(message))
    except InvalidSignature:
        return False
    return True


def verify_signed_message(signed: SignedMessage) -> bool:
    """Verify a SignedMessage bundle."""
    return verify(signed.pubkey, signed.message, signed.signature)


__all__ = [
    "SignedMessage",
    "sign",
    "sign_message",
    "verify",
    "verify_signed_message",
]
