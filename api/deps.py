"""
API Dependencies

Dependency injection for the API. Route handlers receive the keypair
factory through FastAPI's Depends so tests can substitute a deterministic
entropy source via ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from core.crypto.keys import KeypairFactory, SystemEntropySource


@lru_cache(maxsize=1)
def _system_factory() -> KeypairFactory:
    return KeypairFactory(SystemEntropySource())


def get_keypair_factory() -> KeypairFactory:
    """
    Keypair factory backed by the OS CSPRNG.

    The factory is stateless, so one instance is shared by all requests.
    """
    return _system_factory()

