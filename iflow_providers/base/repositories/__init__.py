"""
Repositories package for providers layer.

Exports:
- KeysRepository / KeyResolution: API key resolution and persistence
- SecretStore implementations: in-memory and environment-backed
"""

from .keys import (
    EnvSecretStore,
    InMemorySecretStore,
    KeyResolution,
    KeysRepository,
    SecretStore,
    storage_key,
)

__all__ = [
    "EnvSecretStore",
    "InMemorySecretStore",
    "KeyResolution",
    "KeysRepository",
    "SecretStore",
    "storage_key",
]
