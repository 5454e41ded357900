"""
Token Routes

Build SPL token instructions: create (InitializeMint) and mint (MintTo).
Instructions are returned encoded; nothing is signed or submitted.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.errors import InvalidRequestError, from_crypto_error
from api.models.requests import CreateTokenRequest, MintTokenRequest
from api.models.responses import InstructionData, SuccessResponse, success
from core.crypto.encoding import decode_public_key
from core.crypto.errors import SigilException
from core.instructions import token


logger = logging.getLogger(__name__)

router = APIRouter(tags=["token"])


def require_fields(*values: str) -> None:
    """Reject blank required string fields."""
    if any(not value or not value.strip() for value in values):
        raise InvalidRequestError()


def parse_address(text: str, field: str) -> bytes:
    """Decode a base58 account address, mapping failures to a 400."""
    try:
        return decode_public_key(text.strip(), field=field)
    except SigilException as e:
        raise from_crypto_error(e) from e


@router.post("/token/create", response_model=SuccessResponse)
async def create_token(request: CreateTokenRequest) -> SuccessResponse:
    """Build an InitializeMint instruction with the mint authority as freeze authority."""
    require_fields(request.mint_authority, request.mint)

    mint_authority = parse_address(request.mint_authority, "mint authority")
    mint = parse_address(request.mint, "mint address")

    try:
        instruction = token.initialize_mint(
            mint,
            mint_authority,
            request.decimals,
            freeze_authority=mint_authority,
        )
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e

    logger.info(f"Built InitializeMint for {request.mint}")
    return success(InstructionData(**instruction.to_dict()))


@router.post("/token/mint", response_model=SuccessResponse)
async def mint_token(request: MintTokenRequest) -> SuccessResponse:
    """Build a MintTo instruction."""
    require_fields(request.mint, request.destination, request.authority)

    mint = parse_address(request.mint, "mint address")
    destination = parse_address(request.destination, "destination address")
    authority = parse_address(request.authority, "authority address")

    try:
        instruction = token.mint_to(mint, destination, authority, request.amount)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e

    logger.info(f"Built MintTo for {request.mint}")
    return success(InstructionData(**instruction.to_dict()))
