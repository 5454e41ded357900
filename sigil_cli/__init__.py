"""
Sigil CLI

Command-line interface for the signing service.

Usage:
    python -m sigil_cli serve --port 8080
    python -m sigil_cli smoke --url http://localhost:8080
    python -m sigil_cli keygen
    python -m sigil_cli sign --secret <base58> "<message>"
    python -m sigil_cli verify --pubkey <base58> --signature <base58> "<message>"
"""

__version__ = "0.1.0"
