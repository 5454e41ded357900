"""
Message Routes

Sign a message with a secret key and verify a detached signature.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.errors import InvalidRequestError, from_crypto_error
from api.models.requests import SignMessageRequest, VerifyMessageRequest
from api.models.responses import SignatureData, SuccessResponse, VerificationData, success
from core.crypto.encoding import decode_public_key, decode_secret_key, decode_signature, encode
from core.crypto.errors import SigilException
from core.crypto.keys import Keypair
from core.crypto.signatures import sign_message as sign_with_keypair
from core.crypto.signatures import verify


logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])


def encode_message(message: str) -> bytes:
    """UTF-8 bytes of a request message; lone surrogates are a 400."""
    try:
        return message.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidRequestError("Invalid message encoding") from e


@router.post("/message/sign", response_model=SuccessResponse)
async def sign_message(request: SignMessageRequest) -> SuccessResponse:
    """
    Sign a UTF-8 message.

    The secret key must be the base58 64-byte keypair returned by
    POST /keypair. It is used for this call only and never logged.
    """
    if not request.message or not request.secret:
        raise InvalidRequestError()

    message = encode_message(request.message)
    try:
        keypair = Keypair.from_secret_key(decode_secret_key(request.secret))
        signed = sign_with_keypair(keypair, message)
    except SigilException as e:
        raise from_crypto_error(e) from e

    logger.info(f"Signed {len(signed.message)}-byte message for {keypair.pubkey}")
    return success(
        SignatureData(
            signature=encode(signed.signature),
            pubkey=encode(signed.pubkey),
            message=request.message,
        )
    )


@router.post("/message/verify", response_model=SuccessResponse)
async def verify_message(request: VerifyMessageRequest) -> SuccessResponse:
    """
    Verify a detached signature.

    A signature that does not verify is a normal result (valid=false), not
    an error. Only undecodable or wrong-length inputs are rejected.
    """
    if not request.message or not request.signature or not request.pubkey:
        raise InvalidRequestError()

    message = encode_message(request.message)
    try:
        public_key = decode_public_key(request.pubkey)
        signature = decode_signature(request.signature)
        valid = verify(public_key, message, signature)
    except SigilException as e:
        raise from_crypto_error(e) from e

    logger.info(f"Verified signature for {request.pubkey}: valid={valid}")
    return success(
        VerificationData(valid=valid, message=request.message, pubkey=request.pubkey)
    )
