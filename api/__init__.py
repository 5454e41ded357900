"""
Sigil HTTP API (FastAPI)

HTTP surface for the signing service:
- POST /keypair - Generate a keypair
- POST /message/sign - Sign a message
- POST /message/verify - Verify a signature
- POST /token/create, /token/mint - SPL token instructions
- POST /send/sol, /send/token - Transfer instructions
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
