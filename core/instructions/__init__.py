"""
Instruction builders for the system and SPL token programs.

Instructions are built and encoded only; nothing here signs or submits a
transaction.
"""

from .models import AccountMeta, Instruction, U64_MAX
from .system import SYSTEM_PROGRAM_ID
from .token import TOKEN_PROGRAM_ID, RENT_SYSVAR_ID
from .pda import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    find_program_address,
    get_associated_token_address,
    is_on_curve,
)
from . import system, token

__all__ = [
    "AccountMeta",
    "Instruction",
    "U64_MAX",
    "SYSTEM_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "RENT_SYSVAR_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "find_program_address",
    "get_associated_token_address",
    "is_on_curve",
    "system",
    "token",
]
