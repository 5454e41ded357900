"""
System Program Instructions

Builders for native SOL transfers.
"""

from __future__ import annotations

import struct

from core.instructions.models import (
    AccountMeta,
    Instruction,
    address,
    require_positive_u64,
)


SYSTEM_PROGRAM_ID = address("11111111111111111111111111111111")

# SystemInstruction enum discriminant, serialized as u32.
TRANSFER = 2


def transfer(from_pubkey: bytes, to_pubkey: bytes, lamports: int) -> Instruction:
    """
    Build a system-program transfer.

    Args:
        from_pubkey: Funding account (signs, debited)
        to_pubkey: Recipient account (credited)
        lamports: Amount to move, must be > 0

    Returns:
        Unsigned Instruction

    Raises:
        ValueError: If lamports is not a positive u64
    """
    require_positive_u64(lamports, "lamports")
    return Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(
            AccountMeta(from_pubkey, is_signer=True, is_writable=True),
            AccountMeta(to_pubkey, is_signer=False, is_writable=True),
        ),
        data=struct.pack("<IQ", TRANSFER, lamports),
    )


__all__ = ["SYSTEM_PROGRAM_ID", "TRANSFER", "transfer"]
