"""
Runtime Configuration Module

Provides configuration loading and management for the signing service.
"""

from .runtime import (
    RateLimitConfig,
    ServiceConfig,
    get_default_config,
    load_service_config,
    set_default_config,
)

__all__ = [
    "RateLimitConfig",
    "ServiceConfig",
    "get_default_config",
    "load_service_config",
    "set_default_config",
]
