"""
Instruction Models

Value types for unsigned Solana instructions and a few encoding helpers
shared by the system and token program builders.
"""

from __future__ import annotations

import base64
import struct
from dataclasses import dataclass, field
from typing import Any

from core.crypto.encoding import PUBLIC_KEY_LENGTH, decode_public_key, encode


U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class AccountMeta:
    """An account referenced by an instruction."""
    pubkey: bytes
    is_signer: bool = False
    is_writable: bool = False

    def __post_init__(self) -> None:
        if len(self.pubkey) != PUBLIC_KEY_LENGTH:
            raise ValueError(
                f"Account pubkey must be {PUBLIC_KEY_LENGTH} bytes, got {len(self.pubkey)}"
            )

    @property
    def address(self) -> str:
        return encode(self.pubkey)


@dataclass(frozen=True)
class Instruction:
    """
    An unsigned instruction.

    Attributes:
        program_id: 32-byte id of the program that executes the instruction
        accounts: Ordered account metas
        data: Program-specific instruction data
    """
    program_id: bytes
    accounts: tuple[AccountMeta, ...] = field(default_factory=tuple)
    data: bytes = b""

    @property
    def program_address(self) -> str:
        return encode(self.program_id)

    @property
    def data_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_dict(self) -> dict[str, Any]:
        return {
            "program_id": self.program_address,
            "accounts": [
                {
                    "pubkey": meta.address,
                    "is_signer": meta.is_signer,
                    "is_writable": meta.is_writable,
                }
                for meta in self.accounts
            ],
            "instruction_data": self.data_base64,
        }


def address(text: str) -> bytes:
    """Decode a well-known base58 address constant."""
    return decode_public_key(text, field="address")


def pack_u64(value: int) -> bytes:
    """Little-endian u64."""
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U64_MAX:
        raise ValueError(f"Value out of u64 range: {value!r}")
    return struct.pack("<Q", value)


def require_positive_u64(value: int, name: str) -> int:
    """Validate a strictly positive u64 amount."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    if value <= 0:
        raise ValueError(f"{name} must be greater than 0")
    if value > U64_MAX:
        raise ValueError(f"{name} exceeds u64 range")
    return value


__all__ = [
    "U64_MAX",
    "AccountMeta",
    "Instruction",
    "address",
    "pack_u64",
    "require_positive_u64",
]
