"""API request and response models."""

from api.models.requests import (
    SignMessageRequest,
    VerifyMessageRequest,
    CreateTokenRequest,
    MintTokenRequest,
    SendSolRequest,
    SendTokenRequest,
)
from api.models.responses import (
    HealthData,
    KeypairData,
    SignatureData,
    VerificationData,
    AccountMetaData,
    InstructionData,
    SolTransferData,
    TokenAccountMetaData,
    TokenTransferData,
    SuccessResponse,
    ErrorResponse,
    success,
)

__all__ = [
    "SignMessageRequest",
    "VerifyMessageRequest",
    "CreateTokenRequest",
    "MintTokenRequest",
    "SendSolRequest",
    "SendTokenRequest",
    "HealthData",
    "KeypairData",
    "SignatureData",
    "VerificationData",
    "AccountMetaData",
    "InstructionData",
    "SolTransferData",
    "TokenAccountMetaData",
    "TokenTransferData",
    "SuccessResponse",
    "ErrorResponse",
    "success",
]
