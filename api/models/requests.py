"""
API Request Models

Pydantic models for API request validation. Encoded fields are plain
strings here; base58 decoding and length checks happen in the route
handlers so they can map failures onto the error envelope.
"""

from pydantic import BaseModel, ConfigDict, Field


class SignMessageRequest(BaseModel):
    """Request body for POST /message/sign."""

    message: str = Field(..., description="UTF-8 message to sign")
    secret: str = Field(..., description="base58 64-byte secret key")


class VerifyMessageRequest(BaseModel):
    """Request body for POST /message/verify."""

    message: str = Field(..., description="UTF-8 message that was signed")
    signature: str = Field(..., description="base58 64-byte signature")
    pubkey: str = Field(..., description="base58 32-byte public key")


class CreateTokenRequest(BaseModel):
    """Request body for POST /token/create."""

    model_config = ConfigDict(populate_by_name=True)

    mint_authority: str = Field(..., alias="mintAuthority", description="Mint authority address")
    mint: str = Field(..., description="Mint account address")
    decimals: int = Field(..., description="Token decimals (0-255)")


class MintTokenRequest(BaseModel):
    """Request body for POST /token/mint."""

    mint: str = Field(..., description="Mint account address")
    destination: str = Field(..., description="Destination token account")
    authority: str = Field(..., description="Mint authority address")
    amount: int = Field(..., description="Amount in base units")


class SendSolRequest(BaseModel):
    """Request body for POST /send/sol."""

    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(..., alias="from", description="Sender address")
    to: str = Field(..., description="Recipient address")
    lamports: int = Field(..., description="Amount in lamports")


class SendTokenRequest(BaseModel):
    """Request body for POST /send/token."""

    destination: str = Field(..., description="Destination wallet; its associated token account is credited")
    mint: str = Field(..., description="Mint account address")
    owner: str = Field(..., description="Source wallet; signs, and its associated token account is debited")
    amount: int = Field(..., description="Amount in base units")
