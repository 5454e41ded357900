"""
HTTP Client Module

requests-based HTTP client for talking to a running service.
"""

from .client import HttpClient, HttpError, ServiceResponse

__all__ = [
    "HttpClient",
    "HttpError",
    "ServiceResponse",
]
