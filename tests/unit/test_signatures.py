"""
Signature Unit Tests
Tests for core/crypto/signatures.py

Tests:
- RFC 8032 test vectors
- deterministic signing
- tamper sensitivity (message, signature, key)
- malformed inputs give False, wrong-length keys raise
- small-order public keys are rejected
"""
import pytest

from core.crypto.errors import InvalidKeyError
from core.crypto.keys import Keypair
from core.crypto.signatures import (
    SignedMessage,
    sign,
    sign_message,
    verify,
    verify_signed_message,
)


# RFC 8032 section 7.1
VECTORS = [
    # TEST 1
    (
        "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60",
        "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a",
        "",
        "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e06522490155"
        "5fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b",
    ),
    # TEST 2
    (
        "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb",
        "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c",
        "72",
        "92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da"
        "085ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00",
    ),
]

# Encoding of the identity point (order 1).
IDENTITY = bytes([1]) + bytes(31)


@pytest.fixture
def keypair():
    return Keypair.from_seed(bytes.fromhex(VECTORS[0][0]))


class TestRfc8032Vectors:
    """Known-answer tests."""

    @pytest.mark.parametrize("seed,public,message,signature", VECTORS)
    def test_sign(self, seed, public, message, signature):
        keypair = Keypair.from_seed(bytes.fromhex(seed))
        assert keypair.public_key.hex() == public
        assert sign(keypair.secret_key, bytes.fromhex(message)).hex() == signature

    @pytest.mark.parametrize("seed,public,message,signature", VECTORS)
    def test_verify(self, seed, public, message, signature):
        assert verify(bytes.fromhex(public), bytes.fromhex(message), bytes.fromhex(signature))


class TestSign:
    """Tests for sign() and sign_message()."""

    def test_deterministic(self, keypair):
        message = b"Hello, Solana!"
        assert sign(keypair.secret_key, message) == sign(keypair.secret_key, message)

    def test_signature_length(self, keypair):
        assert len(sign(keypair.secret_key, b"x" * 1000)) == 64

    def test_rejects_seed_only(self, keypair):
        with pytest.raises(InvalidKeyError):
            sign(keypair.seed, b"msg")

    def test_rejects_inconsistent_secret_key(self, keypair):
        with pytest.raises(InvalidKeyError):
            sign(keypair.seed + bytes(32), b"msg")

    def test_sign_message_bundle(self, keypair):
        signed = sign_message(keypair, b"Hello, Solana!")

        assert isinstance(signed, SignedMessage)
        assert signed.pubkey == keypair.public_key
        assert signed.message == b"Hello, Solana!"
        assert verify_signed_message(signed)

    def test_signed_message_to_dict(self, keypair):
        data = sign_message(keypair, b"Hello, Solana!").to_dict()
        assert set(data) == {"signature", "pubkey", "message"}
        assert data["pubkey"] == keypair.pubkey
        assert data["message"] == "Hello, Solana!"


class TestVerify:
    """Tests for verify()."""

    def test_valid(self, keypair):
        message = b"Hello, Solana!"
        assert verify(keypair.public_key, message, sign(keypair.secret_key, message)) is True

    def test_tampered_message(self, keypair):
        signature = sign(keypair.secret_key, b"Hello, Solana!")
        assert verify(keypair.public_key, b"Hello, Solana?", signature) is False

    def test_tampered_signature(self, keypair):
        signature = bytearray(sign(keypair.secret_key, b"Hello, Solana!"))
        signature[10] ^= 0x01
        assert verify(keypair.public_key, b"Hello, Solana!", bytes(signature)) is False

    @pytest.mark.parametrize("bit", [0, 7, 100, 511])
    def test_single_bit_flip_in_message(self, keypair, bit):
        message = b"Hello, Solana!".ljust(64, b".")
        signature = sign(keypair.secret_key, message)

        tampered = bytearray(message)
        tampered[bit // 8] ^= 1 << (bit % 8)
        assert verify(keypair.public_key, bytes(tampered), signature) is False

    @pytest.mark.parametrize("bit", [0, 255, 256, 511])
    def test_single_bit_flip_in_signature(self, keypair, bit):
        message = b"Hello, Solana!"
        signature = bytearray(sign(keypair.secret_key, message))

        signature[bit // 8] ^= 1 << (bit % 8)
        assert verify(keypair.public_key, message, bytes(signature)) is False

    @pytest.mark.parametrize("bit", [0, 1, 128, 254, 255])
    def test_single_bit_flip_in_public_key(self, keypair, bit):
        message = b"Hello, Solana!"
        signature = sign(keypair.secret_key, message)

        public_key = bytearray(keypair.public_key)
        public_key[bit // 8] ^= 1 << (bit % 8)
        assert verify(bytes(public_key), message, signature) is False

    def test_other_public_key(self, keypair):
        other = Keypair.from_seed(bytes.fromhex(VECTORS[1][0]))
        signature = sign(keypair.secret_key, b"Hello, Solana!")
        assert verify(other.public_key, b"Hello, Solana!", signature) is False

    @pytest.mark.parametrize("length", [0, 32, 63, 65, 128])
    def test_wrong_signature_length_is_false(self, keypair, length):
        assert verify(keypair.public_key, b"msg", b"\x01" * length) is False

    @pytest.mark.parametrize("length", [0, 31, 33, 64])
    def test_wrong_public_key_length_raises(self, length):
        with pytest.raises(InvalidKeyError):
            verify(b"\x01" * length, b"msg", bytes(64))

    def test_all_zero_signature_is_false(self, keypair):
        assert verify(keypair.public_key, b"msg", bytes(64)) is False

    def test_identity_key_forgery_rejected(self):
        """R = identity, S = 0 satisfies the equation for the identity key."""
        assert verify(IDENTITY, b"any message", IDENTITY + bytes(32)) is False

    def test_zero_key_rejected(self):
        assert verify(bytes(32), b"msg", bytes(64)) is False

    def test_identity_key_with_sign_bit_rejected(self):
        key = IDENTITY[:-1] + b"\x80"
        assert verify(key, b"msg", IDENTITY + bytes(32)) is False
