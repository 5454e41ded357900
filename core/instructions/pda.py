"""
Program-Derived Addresses

PDA derivation and associated-token-account lookup.

A PDA is sha256(seeds || program_id || "ProgramDerivedAddress") chosen so
that it is NOT a valid Ed25519 point, i.e. no secret key can sign for it.
find_program_address tries bump seeds from 255 down to 0 and returns the
first off-curve result.
"""

from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import hash_parts
from core.instructions.models import address
from core.instructions.token import TOKEN_PROGRAM_ID


ASSOCIATED_TOKEN_PROGRAM_ID = address("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")

MAX_SEEDS = 16
MAX_SEED_LENGTH = 32
PDA_MARKER = b"ProgramDerivedAddress"

# Curve25519 field prime and Edwards d = -121665/121666.
_P = 2**255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P


def is_on_curve(point: bytes) -> bool:
    """
    Whether a 32-byte string decompresses to an Ed25519 point.

    The y coordinate decompresses iff (y^2 - 1) / (d*y^2 + 1) is a square
    in the field. The sign bit is ignored.
    """
    if len(point) != 32:
        return False
    y = (int.from_bytes(point, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    x2 = u * pow(v, _P - 2, _P) % _P
    if x2 == 0:
        return True
    return pow(x2, (_P - 1) // 2, _P) == 1


def create_program_address(seeds: Sequence[bytes], program_id: bytes) -> bytes:
    """
    Hash seeds into a program address.

    Raises:
        ValueError: If the seeds are out of bounds or the result is on the curve
    """
    if len(seeds) > MAX_SEEDS:
        raise ValueError(f"Too many seeds: {len(seeds)} (max {MAX_SEEDS})")
    for seed in seeds:
        if len(seed) > MAX_SEED_LENGTH:
            raise ValueError(f"Seed too long: {len(seed)} bytes (max {MAX_SEED_LENGTH})")

    candidate = hash_parts([*seeds, program_id, PDA_MARKER])
    if is_on_curve(candidate):
        raise ValueError("Derived address is on the Ed25519 curve")
    return candidate


def find_program_address(seeds: Sequence[bytes], program_id: bytes) -> tuple[bytes, int]:
    """
    Find a valid program address and its bump seed.

    Returns:
        Tuple of (address, bump)

    Raises:
        ValueError: If no bump in 255..0 yields an off-curve address
    """
    for bump in range(255, -1, -1):
        try:
            return create_program_address([*seeds, bytes([bump])], program_id), bump
        except ValueError:
            continue
    raise ValueError("Unable to find a viable program address bump seed")


def get_associated_token_address(
    wallet: bytes,
    mint: bytes,
    token_program_id: bytes = TOKEN_PROGRAM_ID,
) -> bytes:
    """Associated token account of ``wallet`` for ``mint``."""
    account, _ = find_program_address(
        [bytes(wallet), bytes(token_program_id), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return account


__all__ = [
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "is_on_curve",
    "create_program_address",
    "find_program_address",
    "get_associated_token_address",
]
