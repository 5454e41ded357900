"""
Module 01 - Crypto Error Taxonomy

Standard exceptions raised by the key-material codec, the keypair factory,
the signer and the verifier. Each exception carries a stable machine-readable
code so the HTTP layer can map it to a response without string matching.

Security Notes:
- Messages never contain key bytes or the raw offending input
- The offending input is kept on the exception object only
"""

from __future__ import annotations

from typing import Any


class ErrorCodes:
    """Stable machine-readable error codes used across the service."""

    DECODE_ERROR = "DECODE_ERROR"
    INVALID_KEY = "INVALID_KEY"
    ENTROPY_UNAVAILABLE = "ENTROPY_UNAVAILABLE"


class SigilException(Exception):
    """
    Base exception for all cryptographic core errors.

    Attributes:
        code: Stable error code (see ErrorCodes)
        message: Human-readable message, safe to return to a client
        details: Extra structured context, safe to return to a client
        retryable: Whether retrying the same call could succeed
    """

    def __init__(
        self,
        message: str,
        code: str = "SIGIL_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class DecodeError(SigilException):
    """Raised when a textual EncodedValue is malformed or has the wrong length."""

    def __init__(
        self,
        message: str,
        *,
        field: str = "value",
        value: Any = None,
        expected_length: int | None = None,
        actual_length: int | None = None,
    ) -> None:
        details: dict[str, Any] = {"field": field}
        if expected_length is not None:
            details["expected_length"] = expected_length
        if actual_length is not None:
            details["actual_length"] = actual_length
        super().__init__(message, code=ErrorCodes.DECODE_ERROR, details=details)
        self.field = field
        # Kept for the caller; not part of the message or details.
        self.value = value


class InvalidKeyError(SigilException):
    """Raised when key material has the wrong length or is internally inconsistent."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code=ErrorCodes.INVALID_KEY, details=details)


class EntropyError(SigilException):
    """Raised when the randomness source fails. Fatal, never retried."""

    def __init__(self, message: str = "Entropy source unavailable") -> None:
        super().__init__(message, code=ErrorCodes.ENTROPY_UNAVAILABLE, retryable=False)


__all__ = [
    "ErrorCodes",
    "SigilException",
    "DecodeError",
    "InvalidKeyError",
    "EntropyError",
]
