"""
SPL Token Program Instructions

Builders for the token-program instructions the service exposes:
InitializeMint, MintTo and Transfer. Only single-signer authorities are
supported (no multisig signer lists).
"""

from __future__ import annotations

from typing import Optional

from core.instructions.models import (
    AccountMeta,
    Instruction,
    address,
    pack_u64,
    require_positive_u64,
)


TOKEN_PROGRAM_ID = address("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
RENT_SYSVAR_ID = address("SysvarRent111111111111111111111111111111111")

# TokenInstruction discriminants (first data byte).
INITIALIZE_MINT = 0
TRANSFER = 3
MINT_TO = 7


def initialize_mint(
    mint: bytes,
    mint_authority: bytes,
    decimals: int,
    freeze_authority: Optional[bytes] = None,
) -> Instruction:
    """
    Build InitializeMint.

    Data layout: tag, decimals, mint authority, then the freeze authority as a
    COption (1 + 32 bytes when present, a single zero byte otherwise).

    Raises:
        ValueError: If decimals is outside 0..255
    """
    if not isinstance(decimals, int) or isinstance(decimals, bool) or not 0 <= decimals <= 255:
        raise ValueError(f"decimals must be between 0 and 255, got {decimals!r}")

    data = bytes([INITIALIZE_MINT, decimals]) + bytes(mint_authority)
    if freeze_authority is None:
        data += b"\x00"
    else:
        data += b"\x01" + bytes(freeze_authority)

    return Instruction(
        program_id=TOKEN_PROGRAM_ID,
        accounts=(
            AccountMeta(mint, is_signer=False, is_writable=True),
            AccountMeta(RENT_SYSVAR_ID, is_signer=False, is_writable=False),
        ),
        data=data,
    )


def mint_to(mint: bytes, destination: bytes, authority: bytes, amount: int) -> Instruction:
    """Build MintTo: mint ``amount`` base units into ``destination``."""
    require_positive_u64(amount, "amount")
    return Instruction(
        program_id=TOKEN_PROGRAM_ID,
        accounts=(
            AccountMeta(mint, is_signer=False, is_writable=True),
            AccountMeta(destination, is_signer=False, is_writable=True),
            AccountMeta(authority, is_signer=True, is_writable=False),
        ),
        data=bytes([MINT_TO]) + pack_u64(amount),
    )


def transfer(source: bytes, destination: bytes, owner: bytes, amount: int) -> Instruction:
    """Build Transfer between two token accounts, signed by the source owner."""
    require_positive_u64(amount, "amount")
    return Instruction(
        program_id=TOKEN_PROGRAM_ID,
        accounts=(
            AccountMeta(source, is_signer=False, is_writable=True),
            AccountMeta(destination, is_signer=False, is_writable=True),
            AccountMeta(owner, is_signer=True, is_writable=False),
        ),
        data=bytes([TRANSFER]) + pack_u64(amount),
    )


__all__ = [
    "TOKEN_PROGRAM_ID",
    "RENT_SYSVAR_ID",
    "INITIALIZE_MINT",
    "TRANSFER",
    "MINT_TO",
    "initialize_mint",
    "mint_to",
    "transfer",
]
