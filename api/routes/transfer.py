"""
Transfer Routes

Build native SOL and SPL token transfer instructions.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.errors import InvalidRequestError
from api.models.requests import SendSolRequest, SendTokenRequest
from api.models.responses import (
    SolTransferData,
    SuccessResponse,
    TokenAccountMetaData,
    TokenTransferData,
    success,
)
from api.routes.token import parse_address, require_fields
from core.instructions import system, token
from core.instructions.pda import get_associated_token_address


logger = logging.getLogger(__name__)

router = APIRouter(tags=["transfer"])


@router.post("/send/sol", response_model=SuccessResponse)
async def send_sol(request: SendSolRequest) -> SuccessResponse:
    """Build a system-program transfer of ``lamports`` from ``from`` to ``to``."""
    require_fields(request.from_address, request.to)

    sender = parse_address(request.from_address, "sender address")
    recipient = parse_address(request.to, "recipient address")

    try:
        instruction = system.transfer(sender, recipient, request.lamports)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e

    logger.info(f"Built SOL transfer of {request.lamports} lamports")
    return success(
        SolTransferData(
            program_id=instruction.program_address,
            accounts=[meta.address for meta in instruction.accounts],
            instruction_data=instruction.data_base64,
        )
    )


@router.post("/send/token", response_model=SuccessResponse)
async def send_token(request: SendTokenRequest) -> SuccessResponse:
    """
    Build an SPL token transfer between two wallets.

    ``owner`` and ``destination`` are wallet addresses; the instruction moves
    tokens between their associated token accounts for ``mint``.
    """
    require_fields(request.destination, request.mint, request.owner)

    mint = parse_address(request.mint, "mint address")
    destination = parse_address(request.destination, "destination address")
    owner = parse_address(request.owner, "owner address")

    source_account = get_associated_token_address(owner, mint)
    destination_account = get_associated_token_address(destination, mint)

    try:
        instruction = token.transfer(source_account, destination_account, owner, request.amount)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e

    logger.info(f"Built token transfer of {request.amount} for mint {request.mint}")
    return success(
        TokenTransferData(
            program_id=instruction.program_address,
            accounts=[
                TokenAccountMetaData(pubkey=meta.address, is_signer=meta.is_signer)
                for meta in instruction.accounts
            ],
            instruction_data=instruction.data_base64,
        )
    )
