"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m sigil_cli serve [--host HOST] [--port PORT] [--service-config PATH]
    python -m sigil_cli smoke [--url URL] [--message TEXT] [--json]
    python -m sigil_cli keygen [--json]
    python -m sigil_cli sign --secret <base58> "<message>" [--json]
    python -m sigil_cli verify --pubkey <base58> --signature <base58> "<message>" [--json]

Environment Variables:
    HTTP_URL                Base URL for the smoke test (default: http://localhost:8080)
    SIGIL_TIMEOUT           Client request timeout in seconds (default: 30)
    SIGIL_LOG_LEVEL         Log level (default: INFO)
    PORT                    Listen port for serve (default: 8080)
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from sigil_cli import __version__
from sigil_cli.commands import keys, serve, smoke
from sigil_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sigil",
        description="Sigil CLI - Run the signing service, smoke-test it, and sign offline.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to client configuration file (default: ./sigil.json or ~/.config/sigil/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- serve command ---
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service",
        description="Serve the signing API with uvicorn.",
    )
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Listen port")
    serve_parser.add_argument(
        "--service-config",
        type=Path,
        default=None,
        help="Service configuration file (JSON or YAML)",
    )
    serve_parser.set_defaults(func=serve.serve_cmd)

    # --- smoke command ---
    smoke_parser = subparsers.add_parser(
        "smoke",
        help="Smoke-test a running service",
        description="Generate a keypair, sign a message and verify it over HTTP.",
    )
    smoke_parser.add_argument("--url", type=str, default=None, help="Service base URL")
    smoke_parser.add_argument("--message", type=str, default=None, help="Message to sign")
    smoke_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output results as JSON",
    )
    smoke_parser.set_defaults(func=smoke.smoke_cmd)

    # --- keygen command ---
    keygen_parser = subparsers.add_parser(
        "keygen",
        help="Generate a keypair offline",
    )
    keygen_parser.add_argument("--json", action="store_true", default=False, help="Output as JSON")
    keygen_parser.set_defaults(func=keys.keygen_cmd)

    # --- sign command ---
    sign_parser = subparsers.add_parser(
        "sign",
        help="Sign a message offline",
    )
    sign_parser.add_argument("message", type=str, help="UTF-8 message to sign")
    sign_parser.add_argument("--secret", type=str, required=True, help="base58 64-byte secret key")
    sign_parser.add_argument("--json", action="store_true", default=False, help="Output as JSON")
    sign_parser.set_defaults(func=keys.sign_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a signature offline",
    )
    verify_parser.add_argument("message", type=str, help="UTF-8 message that was signed")
    verify_parser.add_argument("--pubkey", type=str, required=True, help="base58 public key")
    verify_parser.add_argument("--signature", type=str, required=True, help="base58 signature")
    verify_parser.add_argument("--json", action="store_true", default=False, help="Output as JSON")
    verify_parser.set_defaults(func=keys.verify_cmd)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    setup_logging(level=args.log_level or config.log_level)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
