"""
CLI Configuration

Client-side settings for the smoke test and offline commands.
Environment variables override config file settings.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "SIGIL_"

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_MESSAGE = "Hello, Solana!"


@dataclass
class ClientConfig:
    """Main CLI configuration."""

    # Service under test
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0

    # Smoke test payload
    message: str = DEFAULT_MESSAGE

    # Logging
    log_level: str = "INFO"


def load_config_from_file(path: Path) -> ClientConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    client = data.get("client", data)
    config = ClientConfig()
    config.base_url = client.get("base_url", config.base_url)
    config.timeout = float(client.get("timeout", config.timeout))
    config.message = client.get("message", config.message)
    config.log_level = data.get("log_level", config.log_level)
    return config


def load_config(config_path: Path | None = None) -> ClientConfig:
    """
    Load configuration from file and/or environment.

    ``HTTP_URL`` sets the base URL of the service.
    """
    config = ClientConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in (
            Path.cwd() / "sigil.json",
            Path.cwd() / ".sigil.json",
            Path.home() / ".config" / "sigil" / "config.json",
        ):
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    if os.getenv("HTTP_URL"):
        config.base_url = os.getenv("HTTP_URL", DEFAULT_BASE_URL)
    if os.getenv(f"{ENV_PREFIX}TIMEOUT"):
        config.timeout = float(os.getenv(f"{ENV_PREFIX}TIMEOUT", "30"))
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")

    config.base_url = config.base_url.rstrip("/")
    return config
