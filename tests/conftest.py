"""
Pytest configuration and shared fixtures for Sigil tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides deterministic entropy sources and an API client
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from api.app import create_app  # noqa: E402
from api.deps import get_keypair_factory  # noqa: E402
from core.config.runtime import RateLimitConfig, ServiceConfig  # noqa: E402
from core.crypto.keys import KeypairFactory  # noqa: E402


# RFC 8032 section 7.1, TEST 1
RFC8032_SEED = bytes.fromhex(
    "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
)
RFC8032_PUBLIC_KEY = bytes.fromhex(
    "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
)
RFC8032_SIGNATURE = bytes.fromhex(
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e06522490155"
    "5fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)


# =============================================================================
# Entropy Sources
# =============================================================================

class FixedEntropySource:
    """Returns the same bytes on every read."""

    def __init__(self, seed: bytes = RFC8032_SEED):
        self.seed = seed
        self.reads = 0

    def read(self, n: int) -> bytes:
        self.reads += 1
        return self.seed[:n]


class FailingEntropySource:
    """Simulates an unavailable OS random source."""

    def read(self, n: int) -> bytes:
        raise OSError("getrandom unavailable")


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def fixed_entropy():
    """Deterministic entropy source seeded with the RFC 8032 test seed."""
    return FixedEntropySource()


@pytest.fixture
def failing_entropy():
    """Entropy source whose every read fails."""
    return FailingEntropySource()


@pytest.fixture
def service_config():
    """Service config with rate limiting off so tests can hammer endpoints."""
    return ServiceConfig(rate_limit=RateLimitConfig(enabled=False))


@pytest.fixture
def app(service_config):
    """A fresh application instance."""
    return create_app(service_config)


@pytest.fixture
def client(app):
    """TestClient over a fresh application instance."""
    return TestClient(app)


@pytest.fixture
def fixed_client(app, fixed_entropy):
    """TestClient whose /keypair always returns the RFC 8032 test keypair."""
    app.dependency_overrides[get_keypair_factory] = lambda: KeypairFactory(fixed_entropy)
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
