"""API route handlers."""

from api.routes import health, keypair, message, token, transfer

__all__ = ["health", "keypair", "message", "token", "transfer"]
