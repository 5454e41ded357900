"""
Runtime Configuration

Central configuration for the HTTP service: bind address, logging,
CORS, security headers and rate limiting.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


ENV_PREFIX = "SIGIL_"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RateLimitConfig:
    """Per-client token bucket settings."""
    enabled: bool = True
    requests_per_second: float = 10.0
    burst_size: int = 5


@dataclass
class ServiceConfig:
    """
    Complete runtime configuration for the signing service.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    security_headers: bool = True
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - PORT: Listen port
        - SIGIL_HOST: Bind address
        - SIGIL_LOG_LEVEL: Log level name
        - SIGIL_RATE_LIMIT_ENABLED: Enable rate limiting (true/false)
        - SIGIL_RATE_LIMIT_PER_SECOND: Token refill rate per client
        - SIGIL_RATE_LIMIT_BURST: Bucket capacity per client
        """
        overrides: dict[str, Any] = {}

        if os.getenv("PORT"):
            overrides["port"] = int(os.getenv("PORT", "8080"))
        if os.getenv(f"{ENV_PREFIX}HOST"):
            overrides["host"] = os.getenv(f"{ENV_PREFIX}HOST")
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        if os.getenv(f"{ENV_PREFIX}RATE_LIMIT_ENABLED"):
            overrides.setdefault("rate_limit", {})["enabled"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}RATE_LIMIT_ENABLED", "true")
            )
        if os.getenv(f"{ENV_PREFIX}RATE_LIMIT_PER_SECOND"):
            overrides.setdefault("rate_limit", {})["requests_per_second"] = float(
                os.getenv(f"{ENV_PREFIX}RATE_LIMIT_PER_SECOND", "10")
            )
        if os.getenv(f"{ENV_PREFIX}RATE_LIMIT_BURST"):
            overrides.setdefault("rate_limit", {})["burst_size"] = int(
                os.getenv(f"{ENV_PREFIX}RATE_LIMIT_BURST", "5")
            )

        return overrides

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ServiceConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "ServiceConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConfig":
        """Load configuration from a dictionary (supports partial data)."""
        defaults = cls()
        rate_data = data.get("rate_limit", {})
        rate_limit = RateLimitConfig(**rate_data) if rate_data else RateLimitConfig()

        return cls(
            host=data.get("host", defaults.host),
            port=int(data.get("port", defaults.port)),
            log_level=data.get("log_level", defaults.log_level),
            cors_origins=list(data.get("cors_origins", defaults.cors_origins)),
            security_headers=data.get("security_headers", defaults.security_headers),
            rate_limit=rate_limit,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "ServiceConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key in ("host", "port", "log_level"):
            if key in overrides:
                setattr(new_config, key, overrides[key])

        if "rate_limit" in overrides:
            for key, value in overrides["rate_limit"].items():
                setattr(new_config.rate_limit, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
            "cors_origins": list(self.cors_origins),
            "security_headers": self.security_headers,
            "rate_limit": {
                "enabled": self.rate_limit.enabled,
                "requests_per_second": self.rate_limit.requests_per_second,
                "burst_size": self.rate_limit.burst_size,
            },
            "extra": self.extra,
        }


def config_search_paths() -> list[Path]:
    """Config file locations, in priority order."""
    return [
        Path.cwd() / "sigil.json",
        Path.cwd() / ".sigil.json",
        Path.home() / ".config" / "sigil" / "config.json",
    ]


def load_service_config(path: str | Path | None = None) -> ServiceConfig:
    """
    Load ServiceConfig from a config file, then overlay environment variables.

    An explicit ``path`` may be JSON or YAML (by extension). Without one, the
    first existing file from config_search_paths() is used.

    Environment variables ALWAYS override config file values.
    """
    config: ServiceConfig | None = None

    if path is not None:
        path = Path(path)
        if path.suffix in (".yaml", ".yml"):
            config = ServiceConfig.from_yaml(path)
        else:
            config = ServiceConfig.from_json(path)
    else:
        for candidate in config_search_paths():
            if candidate.exists():
                try:
                    config = ServiceConfig.from_json(candidate)
                    logger.info(f"Loaded config from {candidate}")
                    break
                except (OSError, ValueError, TypeError) as e:
                    logger.warning(f"Failed to parse {candidate}: {e}")

    if config is None:
        config = ServiceConfig()

    return config.with_env_overrides()


# Global default configuration
_default_config: Optional[ServiceConfig] = None


def get_default_config() -> ServiceConfig:
    """Get the default service configuration."""
    global _default_config
    if _default_config is None:
        _default_config = load_service_config()
    return _default_config


def set_default_config(config: ServiceConfig) -> None:
    """Set the default service configuration."""
    global _default_config
    _default_config = config
