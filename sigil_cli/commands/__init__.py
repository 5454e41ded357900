"""
CLI command modules.
"""

from sigil_cli.commands import keys, serve, smoke

__all__ = ["keys", "serve", "smoke"]
