"""
Keypair Route

Generate a fresh Ed25519 keypair.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_keypair_factory
from api.errors import from_crypto_error
from api.models.responses import KeypairData, SuccessResponse, success
from core.crypto.encoding import encode
from core.crypto.errors import EntropyError
from core.crypto.keys import KeypairFactory


logger = logging.getLogger(__name__)

router = APIRouter(tags=["keys"])


@router.post("/keypair", response_model=SuccessResponse)
async def generate_keypair(
    factory: KeypairFactory = Depends(get_keypair_factory),
) -> SuccessResponse:
    """
    Generate a new keypair.

    Returns the base58 public key and the base58 64-byte secret key. The
    secret is not stored anywhere on the server.
    """
    try:
        keypair = factory.generate()
    except EntropyError as e:
        raise from_crypto_error(e) from e

    logger.info(f"Generated keypair {keypair.pubkey}")
    return success(KeypairData(pubkey=keypair.pubkey, secret=encode(keypair.secret_key)))
