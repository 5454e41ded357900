"""
CLI Key Commands

Offline keypair generation, signing and verification. These use the core
crypto modules directly and never contact a service.

Usage:
    sigil keygen [--json]
    sigil sign --secret <base58> "<message>" [--json]
    sigil verify --pubkey <base58> --signature <base58> "<message>" [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from core.crypto import (
    KeypairFactory,
    Keypair,
    SigilException,
    decode_public_key,
    decode_secret_key,
    decode_signature,
    encode,
    sign_message,
    verify,
)


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def _message_bytes(message: str) -> bytes | None:
    """UTF-8 bytes of MESSAGE, or None (after reporting) if it cannot be encoded."""
    try:
        return message.encode("utf-8")
    except UnicodeEncodeError:
        print("Error: Invalid message encoding", file=sys.stderr)
        return None


def keygen_cmd(args: Namespace) -> int:
    """Generate a keypair and print it."""
    try:
        keypair = KeypairFactory().generate()
    except SigilException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    result = {"pubkey": keypair.pubkey, "secret": encode(keypair.secret_key)}
    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(f"pubkey: {result['pubkey']}")
        print(f"secret: {result['secret']}")
    return EXIT_SUCCESS


def sign_cmd(args: Namespace) -> int:
    """Sign MESSAGE with --secret."""
    message = _message_bytes(args.message)
    if message is None:
        return EXIT_RUNTIME_ERROR

    try:
        keypair = Keypair.from_secret_key(decode_secret_key(args.secret))
        signed = sign_message(keypair, message)
    except SigilException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    result = signed.to_dict()
    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(f"signature: {result['signature']}")
        print(f"pubkey: {result['pubkey']}")
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """Verify a detached signature over MESSAGE."""
    message = _message_bytes(args.message)
    if message is None:
        return EXIT_RUNTIME_ERROR

    try:
        public_key = decode_public_key(args.pubkey)
        signature = decode_signature(args.signature)
        valid = verify(public_key, message, signature)
    except SigilException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({"valid": valid, "pubkey": args.pubkey}, indent=2))
    else:
        status = "✓" if valid else "✗"
        print(f"{status} signature {'valid' if valid else 'INVALID'}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
