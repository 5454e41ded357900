"""
Core cryptographic utilities.

Ed25519 keypairs, detached signatures, and the base58 key-material codec.
"""
from .errors import (
    ErrorCodes,
    SigilException,
    DecodeError,
    InvalidKeyError,
    EntropyError,
)
from .encoding import (
    PUBLIC_KEY_LENGTH,
    SEED_LENGTH,
    SECRET_KEY_LENGTH,
    SIGNATURE_LENGTH,
    encode,
    decode,
    decode_public_key,
    decode_secret_key,
    decode_signature,
)
from .keys import (
    EntropySource,
    SystemEntropySource,
    Keypair,
    KeypairFactory,
    derive_public_key,
)
from .signatures import (
    SignedMessage,
    sign,
    sign_message,
    verify,
    verify_signed_message,
)

__all__ = [
    "ErrorCodes",
    "SigilException",
    "DecodeError",
    "InvalidKeyError",
    "EntropyError",
    "PUBLIC_KEY_LENGTH",
    "SEED_LENGTH",
    "SECRET_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "encode",
    "decode",
    "decode_public_key",
    "decode_secret_key",
    "decode_signature",
    "EntropySource",
    "SystemEntropySource",
    "Keypair",
    "KeypairFactory",
    "derive_public_key",
    "SignedMessage",
    "sign",
    "sign_message",
    "verify",
    "verify_signed_message",
]
