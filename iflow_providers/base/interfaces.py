"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports the single-class modules under
``iflow_providers.base.interfaces_parts`` to keep one stable import path.
"""

from __future__ import annotations

from .interfaces_parts import (
    HasDefaultModel,
    LLMProvider,
    ModelListingProvider,
    TokenEstimator,
)

__all__ = [
    "LLMProvider",
    "ModelListingProvider",
    "HasDefaultModel",
    "TokenEstimator",
]
