"""
API Response Models

Pydantic models for API response serialization. Every response uses the
``{success, data}`` / ``{success, error}`` envelope.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthData(BaseModel):
    """Payload for GET /health."""

    status: str = "Server is running"
    service: str = "sigil-api"
    version: str = "v1"


class KeypairData(BaseModel):
    """Payload for POST /keypair."""

    pubkey: str = Field(..., description="base58 public key")
    secret: str = Field(..., description="base58 64-byte secret key")


class SignatureData(BaseModel):
    """Payload for POST /message/sign."""

    signature: str = Field(..., description="base58 detached signature")
    pubkey: str = Field(..., description="base58 signer public key")
    message: str = Field(..., description="The signed message")


class VerificationData(BaseModel):
    """Payload for POST /message/verify."""

    valid: bool = Field(..., description="Whether the signature is valid")
    message: str
    pubkey: str


class AccountMetaData(BaseModel):
    pubkey: str
    is_signer: bool
    is_writable: bool


class InstructionData(BaseModel):
    """Payload for /token/create and /token/mint."""

    program_id: str
    accounts: list[AccountMetaData] = Field(default_factory=list)
    instruction_data: str = Field(..., description="base64 instruction data")


class SolTransferData(BaseModel):
    """Payload for /send/sol; accounts are bare addresses."""

    program_id: str
    accounts: list[str] = Field(default_factory=list)
    instruction_data: str


class TokenAccountMetaData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pubkey: str
    is_signer: bool = Field(..., alias="isSigner")


class TokenTransferData(BaseModel):
    """Payload for /send/token."""

    program_id: str
    accounts: list[TokenAccountMetaData] = Field(default_factory=list)
    instruction_data: str


class SuccessResponse(BaseModel):
    """Standard success envelope."""

    success: bool = True
    data: Any = None


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    success: bool = False
    error: str = Field(..., description="Human-readable error message")


def success(data: BaseModel) -> SuccessResponse:
    """Wrap a payload model in the success envelope, using wire field names."""
    return SuccessResponse(success=True, data=data.model_dump(by_alias=True))
